"""Walk settings: defaults, merging, color formatting and CLI flags."""

import logging
import math

logger = logging.getLogger(__name__)

# --- Defaults ---

DEFAULT_SETTINGS = {
    "grid_count": 20,  # cells per side
    "canvas_size": 300,  # pixels per side
    "opacity": 0.2,  # coverage added per visit, also the paint alpha
    "speed": 10,  # ms between steps
    "hue_shift": 0.5,  # degrees per step; 0 and 360 never change color
    "saturation": 80,
    "lightness": 75,
    "format": "grid",
    "path_limit": 30,  # trail length in "border" format
    "minimum_opacity": 1,  # inf never finishes, 0 finishes immediately
}

# "full"   - solid blocks with no gap
# "grid"   - solid blocks with a 1px gap
# "border" - only the trailing path, drawn as outlined blocks
FORMATS = ("full", "grid", "border")

INT_KEYS = ("grid_count", "canvas_size", "path_limit")

HELP = {
    "grid_count": "Cells per side",
    "canvas_size": "Canvas size in pixels",
    "opacity": "Coverage added per visit (also the paint alpha)",
    "speed": "Milliseconds between steps",
    "hue_shift": "Hue advance per step in degrees (0-360)",
    "saturation": "Paint saturation (0-100)",
    "lightness": "Paint lightness (0-100)",
    "format": "Cell drawing style",
    "path_limit": "Trail length in border format",
    "minimum_opacity": "Coverage every cell needs before the walk ends (inf never ends)",
}


def _fallback(key, value, base, reason):
    """Replacement for a bad value: the base one, or the default."""
    replacement = (base or DEFAULT_SETTINGS).get(key, DEFAULT_SETTINGS[key])
    if replacement == value:
        replacement = DEFAULT_SETTINGS[key]
    logger.warning("Invalid %s %r (%s), using %r", key, value, reason, replacement)
    return replacement


def merge_settings(options=None, base=None):
    """Overlay ``options`` on ``base`` (DEFAULT_SETTINGS when omitted).

    Missing or None values keep the base value; unknown keys are dropped.
    Invalid values fall back to the base value with a warning.
    Returns a new dict, including the derived ``grid_size``.
    """
    settings = dict(DEFAULT_SETTINGS if base is None else base)
    for key, value in (options or {}).items():
        if value is None:
            continue
        if key not in DEFAULT_SETTINGS:
            logger.warning("Ignoring unknown setting %r", key)
            continue
        settings[key] = value

    for key in INT_KEYS:
        value = float(settings[key])
        if not math.isfinite(value):
            value = _fallback(key, settings[key], base, "must be finite")
        settings[key] = max(1, int(value))
    settings["speed"] = max(0.0, float(settings["speed"]))
    settings["minimum_opacity"] = max(0.0, float(settings["minimum_opacity"]))
    for key in ("hue_shift", "saturation", "lightness"):
        settings[key] = float(settings[key])

    # Coverage only moves toward completion if every visit adds something.
    opacity = float(settings["opacity"])
    if not (opacity > 0 and math.isfinite(opacity)):
        opacity = float(_fallback("opacity", settings["opacity"], base, "must be positive"))
    settings["opacity"] = opacity

    if settings["format"] not in FORMATS:
        fallback = (base or DEFAULT_SETTINGS)["format"]
        if fallback not in FORMATS:
            fallback = DEFAULT_SETTINGS["format"]
        logger.warning(
            "Unknown format %r, using %r. Choose from: %s",
            settings["format"],
            fallback,
            ", ".join(FORMATS),
        )
        settings["format"] = fallback

    if settings["grid_count"] == 1:
        logger.debug("1x1 grid: the walk cannot move and finishes on coverage alone")

    settings["grid_size"] = settings["canvas_size"] / settings["grid_count"]
    return settings


# --- Color ---


def hsl_color(hue, settings):
    """HSLA paint color for a step: (hue, saturation%, lightness%, alpha)."""
    alpha = min(1.0, max(0.0, settings["opacity"]))
    return (hue % 360.0, settings["saturation"], settings["lightness"], alpha)


def format_color(color):
    hue, saturation, lightness, alpha = color
    return f"hsl({hue:g} {saturation:g}% {lightness:g}% / {alpha:g})"


def describe(settings):
    """One line per setting, for console output."""
    lines = []
    for key in DEFAULT_SETTINGS:
        value = settings[key]
        if isinstance(value, float) and math.isinf(value):
            value = "inf"
        lines.append(f"  {key}={value}")
    return "\n".join(lines)


# --- Command line ---


def add_settings_arguments(parser):
    """One ``--flag`` per setting. Defaults are None so only given flags merge."""
    for key, default in DEFAULT_SETTINGS.items():
        flag = "--" + key.replace("_", "-")
        if key == "format":
            parser.add_argument(
                flag, choices=FORMATS, default=None, help=f"{HELP[key]} (default: {default})"
            )
        else:
            parser.add_argument(
                flag,
                type=int if key in INT_KEYS else float,
                default=None,
                help=f"{HELP[key]} (default: {default})",
            )
    return parser


def parse_options(text):
    """Parse ``key=value`` pairs typed at the settings prompt.

    Keys may use dashes or underscores. Every value but ``format`` is read as
    a float ("inf" included); unparseable pairs are skipped with a warning.
    """
    options = {}
    for pair in text.split():
        key, sep, value = pair.partition("=")
        key = key.strip().lstrip("-").replace("-", "_")
        if not sep or not value:
            logger.warning("Expected key=value, got %r", pair)
            continue
        if key == "format":
            options[key] = value
            continue
        try:
            options[key] = float(value)
        except ValueError:
            logger.warning("Not a number for %s: %r", key, value)
    return options


def settings_from_args(args):
    return merge_settings({key: getattr(args, key, None) for key in DEFAULT_SETTINGS})
