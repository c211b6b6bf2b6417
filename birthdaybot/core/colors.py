"""
BirthdayBot - Colors Module
===========================

Color definitions for Discord embeds.
"""


# =============================================================================
# Base Color Values (Hex)
# =============================================================================

# Brand
COLOR_CAKE = 0xF47FFF       # Pink - birthday announcements

# Status colors
COLOR_SUCCESS = 0x43B581    # Green - successful actions
COLOR_ERROR = 0xF04747      # Red - errors and failures


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "COLOR_CAKE",
    "COLOR_SUCCESS",
    "COLOR_ERROR",
]
