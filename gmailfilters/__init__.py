"""gmailfilters: Gmail filters as code.

Declares filters in YAML, translates them to Gmail filter resources (and
back), and applies them to a mailbox through the Gmail API.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
