from solders.pubkey import Pubkey

PROGRAM_ID = Pubkey.from_string("DkVEJV8J2biu2jUBibqUHAzvupfP1XSMMXuARNAe2piM")
