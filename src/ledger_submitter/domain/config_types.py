from dataclasses import dataclass, field


@dataclass(frozen=True)
class SigningIdentity:
    """Account whose transactions this submitter is responsible for."""

    address: str
    secret: str = field(repr=False)

    def __post_init__(self):
        if not self.address:
            raise ValueError("signing address required")
        if not self.secret:
            raise ValueError("signing secret required")

    @property
    def short_address(self) -> str:
        return f"{self.address[:8]}..." if len(self.address) > 8 else self.address
