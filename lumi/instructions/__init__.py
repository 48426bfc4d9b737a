from .common import (
    ACCOUNT_TEMPLATES,
    INSTRUCTION_NAMES,
    AccountRole,
    account_discriminator,
    assemble,
    sighash,
)
from .initialize_config import (
    initialize_config,
    InitializeConfigArgs,
    InitializeConfigAccounts,
)
from .add_issuer import add_issuer, AddIssuerAccounts
from .issue_lumi import issue_lumi, IssueLumiArgs, IssueLumiAccounts
from .issue_lumi_legacy import issue_lumi_legacy
