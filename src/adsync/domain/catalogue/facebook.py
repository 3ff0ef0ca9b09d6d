"""Facebook/Meta ad types: single image, video, carousel, collection."""

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


def _cta(*values: tuple[str, str]) -> AdFieldDefinition:
    return AdFieldDefinition(
        id="callToAction",
        name="Call to Action",
        type=FieldType.SELECT,
        required=True,
        options=[FieldOption(value=value, label=label) for value, label in values],
    )


_PRIMARY_TEXT = AdFieldDefinition(
    id="primaryText",
    name="Primary Text",
    type=FieldType.TEXTAREA,
    required=True,
    supports_variables=True,
    max_length=125,
    placeholder="Enter your message",
    help_text="The main body text. 125 characters recommended.",
)

_HEADLINE = AdFieldDefinition(
    id="headline",
    name="Headline",
    type=FieldType.TEXT,
    required=True,
    supports_variables=True,
    max_length=40,
    placeholder="Catchy headline",
    help_text="Appears below the image. 40 characters recommended.",
)

_DESCRIPTION = AdFieldDefinition(
    id="description",
    name="Description",
    type=FieldType.TEXT,
    supports_variables=True,
    max_length=30,
    placeholder="Optional description",
    help_text="Link description. 30 characters recommended.",
)

_WEBSITE_URL = AdFieldDefinition(
    id="websiteUrl",
    name="Website URL",
    type=FieldType.URL,
    required=True,
    supports_variables=True,
)

_STANDARD_LIMITS = {"primaryText": 125, "headline": 40, "description": 30}

SINGLE_IMAGE = AdTypeDefinition(
    id="single-image",
    platform="facebook",
    name="Single Image Ad",
    description="Simple, effective ads with a single image",
    category="paid",
    icon="image",
    fields=[
        _PRIMARY_TEXT,
        _HEADLINE,
        _DESCRIPTION,
        _WEBSITE_URL,
        _cta(
            ("SHOP_NOW", "Shop Now"),
            ("LEARN_MORE", "Learn More"),
            ("SIGN_UP", "Sign Up"),
            ("DOWNLOAD", "Download"),
            ("BOOK_NOW", "Book Now"),
            ("CONTACT_US", "Contact Us"),
            ("GET_OFFER", "Get Offer"),
            ("GET_QUOTE", "Get Quote"),
            ("SUBSCRIBE", "Subscribe"),
            ("WATCH_MORE", "Watch More"),
            ("APPLY_NOW", "Apply Now"),
            ("ORDER_NOW", "Order Now"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="image",
            name="Ad Image",
            type="image",
            required=True,
            specs=CreativeSpecs(
                aspect_ratios=["1:1", "1.91:1"],
                recommended_width=1080,
                min_width=600,
                max_file_size=30_000_000,
                allowed_formats=["jpg", "png"],
            ),
            help_text="Recommended: 1080x1080 (1:1) or 1200x628 (1.91:1)",
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits=dict(_STANDARD_LIMITS),
        platform_rules=[
            "Text in images should be minimal (< 20%)",
            "Avoid misleading claims",
            "Landing page must match ad content",
        ],
    ),
    rule_set="facebook.single-image",
    preview_component="FacebookSingleImagePreview",
)

VIDEO = AdTypeDefinition(
    id="video",
    platform="facebook",
    name="Video Ad",
    description="Engaging video content for your audience",
    category="paid",
    icon="video",
    fields=[
        _PRIMARY_TEXT,
        _HEADLINE,
        _DESCRIPTION,
        _WEBSITE_URL,
        _cta(
            ("WATCH_MORE", "Watch More"),
            ("LEARN_MORE", "Learn More"),
            ("SHOP_NOW", "Shop Now"),
            ("SIGN_UP", "Sign Up"),
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="video",
            name="Video",
            type="video",
            required=True,
            specs=CreativeSpecs(
                aspect_ratios=["1:1", "4:5", "9:16", "16:9"],
                min_duration=1,
                max_duration=240,
                max_file_size=4_000_000_000,
                allowed_formats=["mp4", "mov"],
            ),
            help_text="Recommended length: 15-60 seconds. Max: 4 minutes.",
        ),
        CreativeRequirement(
            id="thumbnail",
            name="Custom Thumbnail",
            type="image",
            specs=CreativeSpecs(aspect_ratios=["1:1", "16:9"], max_file_size=30_000_000),
        ),
    ],
    constraints=AdTypeConstraints(character_limits=dict(_STANDARD_LIMITS)),
    rule_set="facebook.video",
    preview_component="FacebookVideoAdPreview",
)

CAROUSEL = AdTypeDefinition(
    id="carousel",
    platform="facebook",
    name="Carousel Ad",
    description="Showcase up to 10 images or videos in a single ad",
    category="paid",
    icon="carousel",
    fields=[
        _PRIMARY_TEXT,
        AdFieldDefinition(
            id="websiteUrl",
            name="Default Website URL",
            type=FieldType.URL,
            required=True,
            supports_variables=True,
            help_text="Default URL for cards without individual links.",
        ),
        _cta(
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
            max_count=10,
            specs=CreativeSpecs(
                aspect_ratios=["1:1"],
                recommended_width=1080,
                recommended_height=1080,
                max_file_size=30_000_000,
                allowed_formats=["jpg", "png"],
            ),
            help_text="Add 2-10 cards. Each card has an image, headline, and optional link.",
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits={"primaryText": 125, "cardHeadline": 40, "cardDescription": 20},
    ),
    rule_set="facebook.carousel",
    preview_component="FacebookCarouselAdPreview",
)

COLLECTION = AdTypeDefinition(
    id="collection",
    platform="facebook",
    name="Collection Ad",
    description="Showcase products with an immersive mobile experience",
    category="paid",
    icon="collection",
    fields=[
        _PRIMARY_TEXT,
        _HEADLINE,
        AdFieldDefinition(
            id="instantExperienceId",
            name="Instant Experience",
            type=FieldType.TEXT,
            required=True,
            help_text="ID of the Instant Experience template.",
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="coverImage",
            name="Cover Image or Video",
            type="image",
            required=True,
            specs=CreativeSpecs(aspect_ratios=["1.91:1", "1:1"], max_file_size=30_000_000),
        ),
        CreativeRequirement(
            id="products",
            name="Product Images",
            type="carousel",
            required=True,
            min_count=4,
            specs=CreativeSpecs(aspect_ratios=["1:1"]),
        ),
    ],
    constraints=AdTypeConstraints(character_limits={"primaryText": 125, "headline": 40}),
    features=AdTypeFeatures(supports_multiple_ads=False),
    rule_set="facebook.collection",
    preview_component="FacebookCollectionAdPreview",
)

FACEBOOK_AD_TYPES: tuple[AdTypeDefinition, ...] = (
    SINGLE_IMAGE,
    VIDEO,
    CAROUSEL,
    COLLECTION,
)
