"""Error taxonomy shared by the parser, catalog and loaders."""


class CompatError(ValueError):
    """Base class for all compatibility-checking errors."""


class MalformedVersionError(CompatError):
    """A build number string does not follow BRANCH[.BUILD[.FIX]]."""

    def __init__(self, value, reason, message=None):
        self.value = value
        self.reason = reason
        super().__init__(message or f"Malformed build number '{value}': {reason}")


class RangeInversionError(MalformedVersionError):
    """The declared lower bound lies above the bounded upper bound."""

    def __init__(self, since_build, until_build):
        self.since_build = since_build
        self.until_build = until_build
        super().__init__(
            f"{since_build}..{until_build}",
            "range inversion",
            message=f"sinceBuild '{since_build}' is greater than untilBuild '{until_build}'",
        )


class EmptySinceBuildError(CompatError):
    """sinceBuild was not provided; a lower bound is mandatory."""

    def __init__(self, value=None):
        self.value = value
        super().__init__("sinceBuild is required and must not be empty")


class DuplicateCatalogEntryError(CompatError):
    """Two catalog records share a branch or a marketing version."""

    def __init__(self, key, first, second):
        self.key = key
        super().__init__(
            f"Duplicate catalog entry for '{key}': '{first}' and '{second}'"
        )


class UnknownVersionError(CompatError, LookupError):
    """The catalog has no entry for the requested version.

    Callers should report the target as unverifiable, not as incompatible.
    """

    def __init__(self, key):
        self.key = key
        super().__init__(f"Unknown IDE version '{key}'")


class CatalogLoadError(CompatError):
    """The catalog source could not be read or failed validation."""


class ManifestError(CompatError):
    """No compatibility declaration could be read from a plugin manifest."""


class IssueFileError(CompatError):
    """The external API usage issue file could not be read or is invalid."""
