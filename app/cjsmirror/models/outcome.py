"""Run outcome model.

The pipeline never exits the process itself; it reports an Outcome and the
CLI translates that into console output and an exit code.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of a complete mirror run.

    Attributes:
        success: True if every pending version was handled.
        message: Failure description, empty on success.
        published: Versions published (or dry-run published), in order.
        skipped: Versions skipped because they are not ES-module packages.
    """

    success: bool
    message: str = ""
    published: tuple[str, ...] = field(default=())
    skipped: tuple[str, ...] = field(default=())

    @classmethod
    def succeeded(
        cls,
        published: tuple[str, ...] = (),
        skipped: tuple[str, ...] = (),
    ) -> "Outcome":
        """Create a successful outcome."""
        return cls(success=True, published=published, skipped=skipped)

    @classmethod
    def failed(
        cls,
        message: str,
        published: tuple[str, ...] = (),
        skipped: tuple[str, ...] = (),
    ) -> "Outcome":
        """Create a failed outcome carrying the error message."""
        return cls(success=False, message=message, published=published, skipped=skipped)

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome."""
        return 0 if self.success else 1
