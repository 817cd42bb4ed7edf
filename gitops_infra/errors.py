"""
Configuration errors raised while a stack program is evaluated
"""

import pulumi


class StackConfigurationError(pulumi.RunError):
    """A required setting or upstream stack output is missing or invalid"""
