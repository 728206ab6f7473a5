"""Exception types shared by the aggregator, reviewer and HTTP layer."""


class PRDashboardError(Exception):
    """Base class for application errors."""


class AuthenticationError(PRDashboardError):
    """No usable GitHub credential for the current caller."""


class RetrievalError(PRDashboardError):
    """An upstream GitHub call failed in a way the caller must see."""


class OAuthError(PRDashboardError):
    """GitHub rejected the OAuth code exchange."""


class ModelConfigurationError(PRDashboardError):
    """The AI service could not find the configured model."""
