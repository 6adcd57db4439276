"""Exceptions raised while generating withdrawal credential changes."""


class CredentialChangeError(Exception):
    """Base error for credential change generation."""


class InputInvalidError(CredentialChangeError):
    """Malformed input, detected before any key derivation."""


class InvalidMnemonicError(InputInvalidError):
    def __init__(self):
        super().__init__("mnemonic is invalid")


class InvalidWithdrawalAddressError(InputInvalidError):
    """Withdrawal address cannot be used."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid withdrawal address: {reason}")


class MissingWithdrawalAddressError(InvalidWithdrawalAddressError):
    def __init__(self):
        super().__init__("no withdrawal address provided")


class WithdrawalAddressPrefixError(InvalidWithdrawalAddressError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"withdrawal address {address} does not contain a 0x prefix")


class WithdrawalAddressEncodingError(InvalidWithdrawalAddressError):
    def __init__(self, address: str, detail: str):
        self.address = address
        super().__init__(f"failed to obtain execution address: {detail}")


class WithdrawalAddressLengthError(InvalidWithdrawalAddressError):
    def __init__(self, address: str):
        self.address = address
        super().__init__("withdrawal address must be exactly 20 bytes in length")


class NoSelectorError(InputInvalidError):
    """Neither a path nor a validator was supplied."""


class ConflictingSelectorError(InputInvalidError):
    """More than one way of selecting validators was supplied."""


class InvalidPublicKeyError(InputInvalidError):
    def __init__(self, detail: str):
        super().__init__(f"invalid public key: {detail}")


class InvalidPrivateKeyError(InputInvalidError):
    def __init__(self, detail: str):
        super().__init__(f"invalid private key: {detail}")


class PathInvalidError(CredentialChangeError):
    """Derivation path does not have the required shape."""


class UnknownValidatorError(CredentialChangeError):
    """Selector does not resolve to a known, eligible validator."""


class DerivationFailedError(CredentialChangeError):
    """Key derivation primitive failed."""


class SigningFailedError(CredentialChangeError):
    """Signing primitive failed."""


class CredentialsMismatchError(CredentialChangeError):
    """Withdrawal key does not hash to the validator's withdrawal credentials."""

    def __init__(self, validator_pubkey: bytes, credentials: bytes):
        self.validator_pubkey = validator_pubkey
        self.credentials = credentials
        super().__init__(
            f"validator 0x{validator_pubkey.hex()} withdrawal credentials "
            f"0x{credentials.hex()} do not match expected credentials, cannot update"
        )
