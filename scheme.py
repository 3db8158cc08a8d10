"""
Material color schemes: named UI color roles picked from a core palette.

Each role is one tone of one tonal palette. Light schemes use dark accents
on light surfaces, dark schemes the reverse.
"""

from dataclasses import asdict, dataclass

from color_math import hex_from_argb
from palettes import CorePalette


# =============================================================================
# Role Tones
# =============================================================================

# role -> (palette attribute on CorePalette, tone)
LIGHT_ROLES = {
    'primary': ('primary', 40),
    'on_primary': ('primary', 100),
    'primary_container': ('primary', 90),
    'on_primary_container': ('primary', 10),
    'secondary': ('secondary', 40),
    'on_secondary': ('secondary', 100),
    'secondary_container': ('secondary', 90),
    'on_secondary_container': ('secondary', 10),
    'tertiary': ('tertiary', 40),
    'on_tertiary': ('tertiary', 100),
    'tertiary_container': ('tertiary', 90),
    'on_tertiary_container': ('tertiary', 10),
    'error': ('error', 40),
    'on_error': ('error', 100),
    'error_container': ('error', 90),
    'on_error_container': ('error', 10),
    'background': ('neutral', 99),
    'on_background': ('neutral', 10),
    'surface': ('neutral', 99),
    'on_surface': ('neutral', 10),
    'surface_variant': ('neutral_variant', 90),
    'on_surface_variant': ('neutral_variant', 30),
    'outline': ('neutral_variant', 50),
    'outline_variant': ('neutral_variant', 80),
    'shadow': ('neutral', 0),
    'scrim': ('neutral', 0),
    'inverse_surface': ('neutral', 20),
    'inverse_on_surface': ('neutral', 95),
    'inverse_primary': ('primary', 80),
}

DARK_ROLES = {
    'primary': ('primary', 80),
    'on_primary': ('primary', 20),
    'primary_container': ('primary', 30),
    'on_primary_container': ('primary', 90),
    'secondary': ('secondary', 80),
    'on_secondary': ('secondary', 20),
    'secondary_container': ('secondary', 30),
    'on_secondary_container': ('secondary', 90),
    'tertiary': ('tertiary', 80),
    'on_tertiary': ('tertiary', 20),
    'tertiary_container': ('tertiary', 30),
    'on_tertiary_container': ('tertiary', 90),
    'error': ('error', 80),
    'on_error': ('error', 20),
    'error_container': ('error', 30),
    'on_error_container': ('error', 80),
    'background': ('neutral', 10),
    'on_background': ('neutral', 90),
    'surface': ('neutral', 10),
    'on_surface': ('neutral', 90),
    'surface_variant': ('neutral_variant', 30),
    'on_surface_variant': ('neutral_variant', 80),
    'outline': ('neutral_variant', 60),
    'outline_variant': ('neutral_variant', 30),
    'shadow': ('neutral', 0),
    'scrim': ('neutral', 0),
    'inverse_surface': ('neutral', 90),
    'inverse_on_surface': ('neutral', 20),
    'inverse_primary': ('primary', 40),
}


@dataclass
class Scheme:
    """ARGB colors for every role of a Material theme."""
    primary: int
    on_primary: int
    primary_container: int
    on_primary_container: int
    secondary: int
    on_secondary: int
    secondary_container: int
    on_secondary_container: int
    tertiary: int
    on_tertiary: int
    tertiary_container: int
    on_tertiary_container: int
    error: int
    on_error: int
    error_container: int
    on_error_container: int
    background: int
    on_background: int
    surface: int
    on_surface: int
    surface_variant: int
    on_surface_variant: int
    outline: int
    outline_variant: int
    shadow: int
    scrim: int
    inverse_surface: int
    inverse_on_surface: int
    inverse_primary: int

    @classmethod
    def _from_roles(cls, palette: CorePalette, roles: dict) -> 'Scheme':
        return cls(**{
            role: getattr(palette, palette_name).tone(tone)
            for role, (palette_name, tone) in roles.items()
        })

    @classmethod
    def light_from_core_palette(cls, palette: CorePalette) -> 'Scheme':
        return cls._from_roles(palette, LIGHT_ROLES)

    @classmethod
    def dark_from_core_palette(cls, palette: CorePalette) -> 'Scheme':
        return cls._from_roles(palette, DARK_ROLES)

    @classmethod
    def light(cls, argb: int) -> 'Scheme':
        return cls.light_from_core_palette(CorePalette.of(argb))

    @classmethod
    def dark(cls, argb: int) -> 'Scheme':
        return cls.dark_from_core_palette(CorePalette.of(argb))

    @classmethod
    def light_content(cls, argb: int) -> 'Scheme':
        """Light scheme that keeps the seed's chroma, for content-derived themes."""
        return cls.light_from_core_palette(CorePalette.content_of(argb))

    @classmethod
    def dark_content(cls, argb: int) -> 'Scheme':
        return cls.dark_from_core_palette(CorePalette.content_of(argb))

    def to_dict(self, as_hex: bool = False) -> dict:
        """Roles in declaration order, as ARGB ints or #rrggbb strings."""
        colors = asdict(self)
        if as_hex:
            return {role: hex_from_argb(argb) for role, argb in colors.items()}
        return colors
