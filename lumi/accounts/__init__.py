from .config import Config, ConfigJSON
from .issuer import Issuer, IssuerJSON
