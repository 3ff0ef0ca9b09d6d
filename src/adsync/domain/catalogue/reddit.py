"""Reddit ad types: link, image, video, carousel, conversation and organic threads."""

from __future__ import annotations

from ..ad_types import (
    AdFieldDefinition,
    AdTypeConstraints,
    AdTypeDefinition,
    AdTypeFeatures,
    CreativeRequirement,
    CreativeSpecs,
    FieldOption,
    FieldType,
)


def _title(name: str = "Title", help_text: str | None = None) -> AdFieldDefinition:
    return AdFieldDefinition(
        id="title",
        name=name,
        type=FieldType.TEXT,
        required=True,
        supports_variables=True,
        max_length=300,
        help_text=help_text,
    )


def _body(help_text: str) -> AdFieldDefinition:
    return AdFieldDefinition(
        id="body",
        name="Post Body",
        type=FieldType.TEXTAREA,
        supports_variables=True,
        max_length=40_000,
        help_text=help_text,
    )


def _destination_url(required: bool = True, help_text: str | None = None) -> AdFieldDefinition:
    return AdFieldDefinition(
        id="destinationUrl",
        name="Destination URL",
        type=FieldType.URL,
        required=required,
        supports_variables=True,
        help_text=help_text,
    )


def _cta(required: bool, *values: tuple[str, str]) -> AdFieldDefinition:
    return AdFieldDefinition(
        id="callToAction",
        name="Call to Action",
        type=FieldType.SELECT,
        required=required,
        options=[FieldOption(value=value, label=label) for value, label in values],
    )


def _media(help_text: str) -> CreativeRequirement:
    return CreativeRequirement(
        id="media",
        name="Media",
        type="image",
        specs=CreativeSpecs(max_file_size=20_000_000, allowed_formats=["jpg", "png", "gif"]),
        help_text=help_text,
    )


LINK = AdTypeDefinition(
    id="link",
    platform="reddit",
    name="Link Ad",
    description="Drive traffic to your website with a promoted post",
    category="paid",
    icon="link",
    fields=[
        _title(help_text="This appears as the post title. Make it engaging and authentic."),
        _destination_url(help_text="Where users will go when they click your ad."),
        AdFieldDefinition(
            id="displayUrl",
            name="Display URL",
            type=FieldType.TEXT,
            supports_variables=True,
            max_length=50,
            placeholder="example.com/page",
            help_text="Simplified URL shown in the ad. Optional.",
        ),
        _cta(
            True,
            ("LEARN_MORE", "Learn More"),
            ("SHOP_NOW", "Shop Now"),
            ("SIGN_UP", "Sign Up"),
            ("INSTALL", "Install"),
            ("DOWNLOAD", "Download"),
            ("WATCH_NOW", "Watch Now"),
            ("PLAY_NOW", "Play Now"),
            ("GET_STARTED", "Get Started"),
            ("APPLY_NOW", "Apply Now"),
            ("BOOK_NOW", "Book Now"),
            ("CONTACT_US", "Contact Us"),
            ("SEE_MORE", "See More"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="thumbnail",
            name="Thumbnail Image",
            type="image",
            specs=CreativeSpecs(
                aspect_ratios=["1:1", "4:3", "16:9"],
                recommended_width=1200,
                recommended_height=628,
                min_width=400,
                min_height=300,
                max_file_size=3_000_000,
                allowed_formats=["jpg", "png", "gif"],
            ),
            help_text="Optional thumbnail. If not provided, the destination URL's image is used.",
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits={"title": 300, "displayUrl": 50},
        platform_rules=[
            "Titles should sound authentic to Reddit",
            "Avoid clickbait or misleading claims",
            "Thumbnails must not contain misleading content",
        ],
    ),
    rule_set="reddit.link",
    preview_component="RedditLinkAdPreview",
)

IMAGE = AdTypeDefinition(
    id="image",
    platform="reddit",
    name="Image Ad",
    description="Showcase your product or brand with a prominent image",
    category="paid",
    icon="image",
    fields=[
        _title(),
        _destination_url(),
        _cta(
            True,
            ("LEARN_MORE", "Learn More"),
            ("SHOP_NOW", "Shop Now"),
            ("SIGN_UP", "Sign Up"),
            ("DOWNLOAD", "Download"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="image",
            name="Primary Image",
            type="image",
            required=True,
            specs=CreativeSpecs(
                aspect_ratios=["1:1", "4:5", "16:9"],
                recommended_width=1200,
                min_width=600,
                max_file_size=3_000_000,
                allowed_formats=["jpg", "png"],
            ),
            help_text="High-quality image that represents your brand or product.",
        ),
    ],
    constraints=AdTypeConstraints(character_limits={"title": 300}),
    rule_set="reddit.image",
    preview_component="RedditImageAdPreview",
)

VIDEO = AdTypeDefinition(
    id="video",
    platform="reddit",
    name="Video Ad",
    description="Engage users with video content",
    category="paid",
    icon="video",
    fields=[
        _title(),
        _destination_url(required=False, help_text="Optional. If not provided, video plays in-feed."),
        _cta(
            False,
            ("WATCH_NOW", "Watch Now"),
            ("LEARN_MORE", "Learn More"),
            ("SHOP_NOW", "Shop Now"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="video",
            name="Video",
            type="video",
            required=True,
            specs=CreativeSpecs(
                aspect_ratios=["16:9", "1:1", "4:5", "9:16"],
                min_duration=5,
                max_duration=60,
                max_file_size=500_000_000,
                allowed_formats=["mp4", "mov"],
            ),
            help_text="Video length: 5-60 seconds. Max file size: 500MB.",
        ),
        CreativeRequirement(
            id="thumbnail",
            name="Custom Thumbnail",
            type="image",
            specs=CreativeSpecs(aspect_ratios=["16:9", "1:1"], max_file_size=3_000_000),
            help_text="Optional. Auto-generated if not provided.",
        ),
    ],
    constraints=AdTypeConstraints(character_limits={"title": 300}),
    rule_set="reddit.video",
    preview_component="RedditVideoAdPreview",
)

CAROUSEL = AdTypeDefinition(
    id="carousel",
    platform="reddit",
    name="Carousel Ad",
    description="Showcase multiple products or features in a swipeable format",
    category="paid",
    icon="carousel",
    fields=[
        _title(),
        _cta(
            True,
            ("SHOP_NOW", "Shop Now"),
            ("LEARN_MORE", "Learn More"),
            ("SEE_MORE", "See More"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="cards",
            name="Carousel Cards",
            type="carousel",
            required=True,
            min_count=2,
            max_count=6,
            specs=CreativeSpecs(
                aspect_ratios=["1:1"],
                recommended_width=1080,
                recommended_height=1080,
                max_file_size=3_000_000,
                allowed_formats=["jpg", "png"],
            ),
            help_text="Add 2-6 cards. Each card needs an image, headline, and optional link.",
        ),
    ],
    constraints=AdTypeConstraints(character_limits={"title": 300, "cardHeadline": 100}),
    rule_set="reddit.carousel",
    preview_component="RedditCarouselAdPreview",
)

CONVERSATION = AdTypeDefinition(
    id="conversation",
    platform="reddit",
    name="Conversation Ad",
    description="Promote a post that encourages community discussion",
    category="promoted",
    icon="message",
    fields=[
        _title("Post Title", "Make it engaging and discussion-worthy."),
        _body("Optional body text. Can include markdown."),
        # No fixed option list: any subreddit name is accepted.
        AdFieldDefinition(
            id="subreddits",
            name="Target Subreddits",
            type=FieldType.MULTISELECT,
            required=True,
            help_text="Select subreddits where your ad will appear.",
        ),
    ],
    creatives=[_media("Optional image or GIF to accompany your post.")],
    constraints=AdTypeConstraints(
        character_limits={"title": 300, "body": 40_000},
        platform_rules=[
            "Post must encourage genuine discussion",
            "Avoid hard-sell language",
            "Respond to comments to boost engagement",
        ],
    ),
    features=AdTypeFeatures(supports_multiple_ads=False),
    rule_set="reddit.conversation",
    preview_component="RedditConversationAdPreview",
)

THREAD = AdTypeDefinition(
    id="thread",
    platform="reddit",
    name="Reddit Thread",
    description="Create organic thread content with posts and comments",
    category="organic",
    icon="thread",
    fields=[
        _title("Post Title", "The main title of your post."),
        _body("The body of your post. Supports markdown."),
        AdFieldDefinition(
            id="subreddit",
            name="Subreddit",
            type=FieldType.TEXT,
            required=True,
            supports_variables=True,
            placeholder="productivity",
            help_text="Target subreddit (without r/).",
        ),
        AdFieldDefinition(
            id="postType",
            name="Post Type",
            type=FieldType.SELECT,
            required=True,
            options=[
                FieldOption(value="text", label="Text Post"),
                FieldOption(value="link", label="Link Post"),
                FieldOption(value="image", label="Image Post"),
                FieldOption(value="video", label="Video Post"),
            ],
        ),
        AdFieldDefinition(
            id="url",
            name="Link URL",
            type=FieldType.URL,
            supports_variables=True,
            help_text="Required for link posts.",
        ),
    ],
    creatives=[_media("Image or GIF for image posts.")],
    constraints=AdTypeConstraints(character_limits={"title": 300, "body": 40_000}),
    features=AdTypeFeatures(supports_multiple_ads=False),
    rule_set="reddit.thread",
    preview_component="RedditThreadPreview",
)

REDDIT_AD_TYPES: tuple[AdTypeDefinition, ...] = (
    LINK,
    IMAGE,
    VIDEO,
    CAROUSEL,
    CONVERSATION,
    THREAD,
)
