"""
Utility functions
"""


def option_label(index: int) -> str:
    """
    Letter shown for an option index

    Example:
        >>> option_label(2)
        'C'
    """
    return chr(ord('A') + index)
