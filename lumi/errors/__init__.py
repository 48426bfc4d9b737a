from .client import (
    LumiClientError,
    InvalidInput,
    InvalidAddress,
    InvalidAmountFormat,
    IncompleteInput,
    InvalidReasonCode,
    MissingConfiguration,
    DerivationExhausted,
    PrerequisiteAccountMissing,
    SubmissionFailed,
    ProgramRejected,
)
from .custom import CustomError, CUSTOM_ERROR_MAP, from_code
