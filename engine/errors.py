"""Errors raised by the bracket engine."""


class StructuralError(ValueError):
    """The schedule or the Annex-C table is malformed.

    Raised for unparsable placeholders, placeholders that reference a missing
    or later match, and Annex-C lookups that cannot succeed. These point at a
    data bug, never at incomplete predictions, so resolution stops instead of
    guessing.
    """
