"""
Tonal palettes and the core palette.

A TonalPalette holds one hue and chroma and produces a color at any tone.
A CorePalette is the set of tonal palettes a UI theme is built from: one for
each of primary, secondary, tertiary, neutral, neutral variant and error.
"""

from cam16 import Cam16
from hct import Hct


class InvalidToneError(ValueError):
    """A palette built from a fixed list was asked for a tone it does not hold."""

    def __init__(self, tone, allowed):
        self.tone = tone
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid tone {tone}: a TonalPalette built from a list only "
            f"holds tones {list(self.allowed)}"
        )


# =============================================================================
# Tonal Palette
# =============================================================================

class TonalPalette:
    """
    Colors of one hue and chroma across the tone range.

    Palettes made with of() or from_int() compute and cache any tone on
    demand. Palettes made with from_list() only know COMMON_TONES.
    """

    COMMON_TONES = (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100)
    COMMON_SIZE = len(COMMON_TONES)
    LIGHT_TONE_CHROMA_CAP = 40.0  # very light tones look garish at full chroma

    def __init__(self, hue=None, chroma=None, cache=None):
        self.hue = hue
        self.chroma = chroma
        self._cache = dict(cache) if cache else {}

    @classmethod
    def of(cls, hue: float, chroma: float) -> 'TonalPalette':
        return cls(hue=hue, chroma=chroma)

    @classmethod
    def from_int(cls, argb: int) -> 'TonalPalette':
        """Palette with the hue and chroma of a color."""
        hct = Hct.from_int(argb)
        return cls.of(hct.hue, hct.chroma)

    @classmethod
    def from_list(cls, colors) -> 'TonalPalette':
        """
        Palette holding exactly the given colors for COMMON_TONES.

        Raises:
            ValueError: If colors does not have COMMON_SIZE entries
        """
        colors = list(colors)
        if len(colors) != cls.COMMON_SIZE:
            raise ValueError(
                f"Expected {cls.COMMON_SIZE} colors, one per common tone, got {len(colors)}"
            )
        return cls(cache=dict(zip(cls.COMMON_TONES, colors)))

    @property
    def is_fixed(self) -> bool:
        return self.hue is None or self.chroma is None

    def tone(self, tone) -> int:
        """
        ARGB color of this palette at the given tone.

        Raises:
            InvalidToneError: If the palette was built from a list and the
                tone is not one of COMMON_TONES
        """
        if self.is_fixed:
            if tone not in self._cache:
                raise InvalidToneError(tone, self.COMMON_TONES)
            return self._cache[tone]

        if tone not in self._cache:
            chroma = self.chroma
            if tone >= 90:
                chroma = min(chroma, self.LIGHT_TONE_CHROMA_CAP)
            self._cache[tone] = Hct.from_hct(self.hue, chroma, float(tone)).to_int()
        return self._cache[tone]

    def as_list(self) -> list:
        return [self.tone(t) for t in self.COMMON_TONES]

    def __eq__(self, other):
        if not isinstance(other, TonalPalette):
            return NotImplemented
        if not self.is_fixed:
            return self.hue == other.hue and self.chroma == other.chroma
        return set(self._cache.values()) == set(other._cache.values())

    def __repr__(self):
        if self.is_fixed:
            return f"TonalPalette(colors={self.as_list()})"
        return f"TonalPalette(hue={self.hue:.2f}, chroma={self.chroma:.2f})"


# =============================================================================
# Core Palette
# =============================================================================

ERROR_HUE = 25.0
ERROR_CHROMA = 84.0


class CorePalette:
    """The tonal palettes of a UI theme, all derived from one color."""

    SIZE = 5  # palettes serialized by as_list(); error is always the same

    def __init__(self, primary, secondary, tertiary, neutral, neutral_variant, error=None):
        self.primary = primary
        self.secondary = secondary
        self.tertiary = tertiary
        self.neutral = neutral
        self.neutral_variant = neutral_variant
        self.error = error if error is not None else TonalPalette.of(ERROR_HUE, ERROR_CHROMA)

    @classmethod
    def of(cls, argb: int) -> 'CorePalette':
        """
        Theme palettes for a color, with chroma chosen for legible UI.

        Primary keeps the color's chroma but never falls below 48, so even
        a muted source produces a vivid accent.
        """
        cam = Cam16.from_int(argb)
        return cls(
            primary=TonalPalette.of(cam.hue, max(48.0, cam.chroma)),
            secondary=TonalPalette.of(cam.hue, 16.0),
            tertiary=TonalPalette.of(cam.hue + 60.0, 24.0),
            neutral=TonalPalette.of(cam.hue, 4.0),
            neutral_variant=TonalPalette.of(cam.hue, 8.0),
        )

    @classmethod
    def content_of(cls, argb: int) -> 'CorePalette':
        """Theme palettes that stay faithful to the color's own chroma."""
        cam = Cam16.from_int(argb)
        return cls(
            primary=TonalPalette.of(cam.hue, cam.chroma),
            secondary=TonalPalette.of(cam.hue, cam.chroma / 3.0),
            tertiary=TonalPalette.of(cam.hue + 60.0, cam.chroma / 2.0),
            neutral=TonalPalette.of(cam.hue, min(cam.chroma / 12.0, 4.0)),
            neutral_variant=TonalPalette.of(cam.hue, min(cam.chroma / 6.0, 8.0)),
        )

    @classmethod
    def from_list(cls, colors) -> 'CorePalette':
        """
        Rebuild from the output of as_list().

        Raises:
            ValueError: If colors does not have SIZE * COMMON_SIZE entries
        """
        colors = list(colors)
        size = TonalPalette.COMMON_SIZE
        if len(colors) != cls.SIZE * size:
            raise ValueError(f"Expected {cls.SIZE * size} colors, got {len(colors)}")
        parts = [TonalPalette.from_list(colors[i * size:(i + 1) * size]) for i in range(cls.SIZE)]
        return cls(*parts)

    def as_list(self) -> list:
        colors = []
        for palette in (self.primary, self.secondary, self.tertiary, self.neutral, self.neutral_variant):
            colors.extend(palette.as_list())
        return colors

    def __eq__(self, other):
        if not isinstance(other, CorePalette):
            return NotImplemented
        return (
            self.primary == other.primary
            and self.secondary == other.secondary
            and self.tertiary == other.tertiary
            and self.neutral == other.neutral
            and self.neutral_variant == other.neutral_variant
            and self.error == other.error
        )
