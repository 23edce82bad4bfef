"""
Conversion options.
"""

from dataclasses import dataclass, replace
from enum import IntEnum

from droconv.utils.validation import ValidationError, validate_rate, validate_tag_text


class ImfFlavor(IntEnum):
    """
    IMF file layout.

    TYPE_0 (flavor A) starts with 4 zero bytes and carries no tags.
    TYPE_1 (flavor B) starts with the 16-bit stream length and may be
    followed by a tag block.
    """

    TYPE_0 = 0
    TYPE_1 = 1

    # Short aliases
    A = 0
    B = 1


# Common IMF playback rates
RATE_KEEN = 560
RATE_WOLF3D = 700


@dataclass
class ConvertOptions:
    """
    Options for a single DRO to IMF conversion.

    Attributes:
        rate: IMF tick rate in Hz
        flavor: Output layout
        title: Song title (TYPE_1 only)
        composer: Composer name (TYPE_1 only)
        remarks: Free text remarks (TYPE_1 only)
    """

    rate: float = RATE_KEEN
    flavor: ImfFlavor = ImfFlavor.TYPE_0
    title: str = ""
    composer: str = ""
    remarks: str = ""

    def validate(self) -> "ConvertOptions":
        """
        Check option values and normalize the flavor.

        Returns:
            Options with flavor coerced to ImfFlavor

        Raises:
            ValidationError: If any option is invalid
        """
        validate_rate(self.rate)

        try:
            flavor = ImfFlavor(self.flavor)
        except ValueError:
            raise ValidationError(f"IMF type must be 0 or 1, got {self.flavor!r}") from None

        for name in ("title", "composer", "remarks"):
            validate_tag_text(getattr(self, name), name.capitalize())

        return replace(self, flavor=flavor)

    @property
    def has_tags(self) -> bool:
        """True if any tag field is non-empty."""
        return bool(self.title or self.composer or self.remarks)
