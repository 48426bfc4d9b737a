import typing
from anchorpy.error import ProgramError


class IssuerInactive(ProgramError):
    def __init__(self) -> None:
        super().__init__(6000, "Issuer is inactive")

    code = 6000
    name = "IssuerInactive"
    msg = "Issuer is inactive"


class DailyCapExceeded(ProgramError):
    def __init__(self) -> None:
        super().__init__(6001, "Daily cap exceeded")

    code = 6001
    name = "DailyCapExceeded"
    msg = "Daily cap exceeded"


class Unauthorized(ProgramError):
    def __init__(self) -> None:
        super().__init__(6002, "Unauthorized")

    code = 6002
    name = "Unauthorized"
    msg = "Unauthorized"


CustomError = typing.Union[
    IssuerInactive,
    DailyCapExceeded,
    Unauthorized,
]
CUSTOM_ERROR_MAP: dict[int, CustomError] = {
    6000: IssuerInactive(),
    6001: DailyCapExceeded(),
    6002: Unauthorized(),
}


def from_code(code: int) -> typing.Optional[CustomError]:
    maybe_err = CUSTOM_ERROR_MAP.get(code)
    if maybe_err is None:
        return None
    return maybe_err
