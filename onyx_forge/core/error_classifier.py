"""Maps generation failures to actionable error reports.

Classification is substring matching over the lower-cased error message.
Rules are evaluated in order and the first match wins; the order matters
because categories share vocabulary ("limit", "key", status codes).
"""

from typing import List, NamedTuple, Tuple

from ..models.enums import ErrorCategory
from ..models.schemas import ErrorReport


class ErrorRule(NamedTuple):
    category: ErrorCategory
    title: str
    keywords: Tuple[str, ...]
    steps: Tuple[str, ...]


RULES: List[ErrorRule] = [
    ErrorRule(
        ErrorCategory.CONTENT_SAFETY,
        "CONTENT SAFETY VIOLATION",
        ("safety", "blocked", "harmful", "prohibited"),
        (
            "The AI model detected sensitive content in the prompt or image.",
            "Modify the description to be more neutral or professional.",
            "Ensure the product URL does not link to restricted categories "
            "(e.g., medical, weapons, adult).",
            "Avoid mentioning real people or copyrighted characters.",
        ),
    ),
    ErrorRule(
        ErrorCategory.RATE_LIMIT,
        "RATE LIMIT EXCEEDED",
        ("429", "quota", "limit", "resource exhausted", "resource_exhausted"),
        (
            "You have hit the maximum number of requests allowed.",
            "Please pause for 60 seconds to let the quota reset.",
            "If you are on a free tier, these limits are lower.",
            "Consider upgrading your Google Cloud project quota if frequent.",
        ),
    ),
    ErrorRule(
        ErrorCategory.PERMISSION_DENIED,
        "PERMISSION DENIED",
        ("403", "permission", "key", "authorized"),
        (
            "The API Key is missing, invalid, or expired.",
            "Verify the API Key is correctly set in your environment variables.",
            'Ensure the Google Cloud project has the "Generative Language API" enabled.',
            "Check if your project has billing enabled (required for some models).",
        ),
    ),
    ErrorRule(
        ErrorCategory.SERVICE_UNAVAILABLE,
        "SERVICE UNAVAILABLE",
        ("503", "500", "internal", "unavailable", "overloaded"),
        (
            "Google's AI servers are currently experiencing high traffic.",
            "This is a temporary issue on the provider side.",
            "Please wait a few minutes and try again.",
            "Check the Google Cloud Service Health Dashboard.",
        ),
    ),
    ErrorRule(
        ErrorCategory.INVALID_REQUEST,
        "INVALID REQUEST PARAMETERS",
        ("400", "invalid argument", "invalid_argument", "bad request"),
        (
            "Check if the Product URL is publicly accessible and free of typos.",
            "Ensure the URL protocol is correct (http:// or https://).",
            "The prompt might be too complex or contain unsupported characters.",
            "Try removing the Product URL to see if that resolves the issue.",
        ),
    ),
    ErrorRule(
        ErrorCategory.NO_OUTPUT,
        "GENERATION PRODUCED NO OUTPUT",
        ("no image data found",),
        (
            "The model accepted the prompt but returned an empty response.",
            "This often happens if the Product URL content cannot be read.",
            "Try slightly rewording your description.",
            "Try generating without the Product URL to isolate the issue.",
        ),
    ),
    ErrorRule(
        ErrorCategory.NETWORK_ERROR,
        "NETWORK CONNECTION ERROR",
        ("fetch failed", "network", "failed to fetch"),
        (
            "Unable to connect to Google API servers.",
            "Check your internet connection.",
            "Disable ad-blockers, VPNs, or firewalls that might block API calls.",
            "Ensure you are not offline.",
        ),
    ),
]

UNEXPECTED_TITLE = "UNEXPECTED ERROR"
UNEXPECTED_STEPS = (
    "Try simplifying your prompt.",
    "Check your internet connection.",
    "Refresh the page and try again.",
)


def error_message(error: object) -> str:
    """Lower-cased message of an exception or any other failure value."""
    try:
        message = str(error)
    except Exception:
        message = type(error).__name__

    if not message and isinstance(error, BaseException):
        message = type(error).__name__

    return message.lower()


def classify(error: object) -> ErrorReport:
    """
    Classify a failure into an ErrorReport.

    Total: always returns a report, never raises.
    """
    message = error_message(error)

    for rule in RULES:
        if any(keyword in message for keyword in rule.keywords):
            return ErrorReport(
                category=rule.category,
                title=rule.title,
                steps=list(rule.steps),
            )

    return ErrorReport(
        category=ErrorCategory.UNEXPECTED,
        title=UNEXPECTED_TITLE,
        steps=[f"System Message: {message}", *UNEXPECTED_STEPS],
    )
