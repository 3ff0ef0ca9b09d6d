"""Cross-field rule sets for the built-in ad types.

Each rule set has the same contract, ``(data) -> ValidationResult``, and is
selected by name from ``RULE_SETS``. Ad type definitions carry only the name.
"""

from __future__ import annotations

from typing import Any, Callable

from .validation_result import ValidationResult

RuleSet = Callable[[dict[str, Any]], ValidationResult]


def _count(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, (list, tuple)):
        return len(value)
    return 0


def _require(result: ValidationResult, data: dict[str, Any], checks: list[tuple[str, str]]) -> None:
    for key, message in checks:
        if not data.get(key):
            result.add_error(message)


# ---------------------------------------------------------------------------
# Google
# ---------------------------------------------------------------------------


def google_responsive_search(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    headlines = data.get("headlines")
    if _count(data, "headlines") < 3:
        result.add_error("At least 3 headlines required")
    if _count(data, "descriptions") < 2:
        result.add_error("At least 2 descriptions required")
    if isinstance(headlines, list) and len(set(map(str, headlines))) != len(headlines):
        result.add_warning("Headlines should be unique for better performance")
    return result


def google_responsive_display(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    if _count(data, "landscapeImages") < 1:
        result.add_error("At least one landscape image required")
    if _count(data, "squareImages") < 1:
        result.add_error("At least one square image required")
    return result


def google_performance_max(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    if _count(data, "headlines") < 3:
        result.add_error("At least 3 headlines required")
    if _count(data, "longHeadlines") < 1:
        result.add_error("At least 1 long headline required")
    if _count(data, "descriptions") < 2:
        result.add_error("At least 2 descriptions required")
    if _count(data, "images") < 1:
        result.add_error("At least 1 image required")
    if _count(data, "logos") < 1:
        result.add_error("At least 1 logo required")
    return result


# ---------------------------------------------------------------------------
# Facebook
# ---------------------------------------------------------------------------


def facebook_single_image(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("image", "Image is required"),
        ("primaryText", "Primary text is required"),
        ("headline", "Headline is required"),
        ("websiteUrl", "Website URL is required"),
        ("callToAction", "Call to action is required"),
    ])
    return result


def facebook_video(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("video", "Video is required"),
        ("primaryText", "Primary text is required"),
        ("headline", "Headline is required"),
        ("websiteUrl", "Website URL is required"),
    ])
    return result


def facebook_carousel(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("primaryText", "Primary text is required"),
        ("websiteUrl", "Website URL is required"),
        ("callToAction", "Call to action is required"),
    ])
    cards = _count(data, "cards")
    if cards < 2:
        result.add_error("At least 2 carousel cards required")
    if cards > 10:
        result.add_error("Maximum 10 carousel cards allowed")
    return result


def facebook_collection(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("primaryText", "Primary text is required"),
        ("headline", "Headline is required"),
        ("instantExperienceId", "Instant Experience ID is required"),
        ("coverImage", "Cover image is required"),
    ])
    if _count(data, "products") < 4:
        result.add_error("At least 4 product images required")
    return result


# ---------------------------------------------------------------------------
# Reddit
# ---------------------------------------------------------------------------


def reddit_link(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("title", "Title is required"),
        ("destinationUrl", "Destination URL is required"),
        ("callToAction", "Call to action is required"),
    ])
    return result


def reddit_image(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("title", "Title is required"),
        ("image", "Image is required"),
        ("destinationUrl", "Destination URL is required"),
    ])
    return result


def reddit_video(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("title", "Title is required"),
        ("video", "Video is required"),
    ])
    return result


def reddit_carousel(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [("title", "Title is required")])
    cards = _count(data, "cards")
    if cards < 2:
        result.add_error("At least 2 carousel cards required")
    if cards > 6:
        result.add_error("Maximum 6 carousel cards allowed")
    return result


def reddit_conversation(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [("title", "Title is required")])
    if _count(data, "subreddits") < 1:
        result.add_error("At least one subreddit required")
    return result


def reddit_thread(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _require(result, data, [
        ("title", "Title is required"),
        ("subreddit", "Subreddit is required"),
    ])
    post_type = data.get("postType")
    if post_type == "link" and not data.get("url"):
        result.add_error("URL is required for link posts")
    if post_type == "image" and not data.get("media"):
        result.add_error("Media is required for image posts")
    return result


RULE_SETS: dict[str, RuleSet] = {
    "google.responsive-search": google_responsive_search,
    "google.responsive-display": google_responsive_display,
    "google.performance-max": google_performance_max,
    "facebook.single-image": facebook_single_image,
    "facebook.video": facebook_video,
    "facebook.carousel": facebook_carousel,
    "facebook.collection": facebook_collection,
    "reddit.link": reddit_link,
    "reddit.image": reddit_image,
    "reddit.video": reddit_video,
    "reddit.carousel": reddit_carousel,
    "reddit.conversation": reddit_conversation,
    "reddit.thread": reddit_thread,
}


def run_rule_set(name: str | None, data: dict[str, Any]) -> ValidationResult:
    """Run the named rule set; unknown or missing names yield an empty valid result."""
    if not name:
        return ValidationResult()
    rule_set = RULE_SETS.get(name)
    if rule_set is None:
        return ValidationResult()
    return rule_set(data)
