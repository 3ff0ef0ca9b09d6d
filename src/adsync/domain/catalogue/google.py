"""Google Ads ad types: responsive search, responsive display, Performance Max."""

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

_DISPLAY_CTA_OPTIONS = [
    FieldOption(value="APPLY_NOW", label="Apply Now"),
    FieldOption(value="BOOK_NOW", label="Book Now"),
    FieldOption(value="CONTACT_US", label="Contact Us"),
    FieldOption(value="DOWNLOAD", label="Download"),
    FieldOption(value="GET_QUOTE", label="Get Quote"),
    FieldOption(value="LEARN_MORE", label="Learn More"),
    FieldOption(value="SHOP_NOW", label="Shop Now"),
    FieldOption(value="SIGN_UP", label="Sign Up"),
    FieldOption(value="SUBSCRIBE", label="Subscribe"),
]

_PMAX_CTA_OPTIONS = [
    FieldOption(value="AUTOMATED", label="Automated (Recommended)"),
    FieldOption(value="LEARN_MORE", label="Learn More"),
    FieldOption(value="SHOP_NOW", label="Shop Now"),
    FieldOption(value="SIGN_UP", label="Sign Up"),
    FieldOption(value="GET_QUOTE", label="Get Quote"),
]

_FINAL_URL = AdFieldDefinition(
    id="finalUrl",
    name="Final URL",
    type=FieldType.URL,
    required=True,
    supports_variables=True,
    placeholder="https://example.com/landing-page",
    help_text="The page users will land on after clicking your ad.",
    group="urls",
)

_BUSINESS_NAME = AdFieldDefinition(
    id="businessName",
    name="Business Name",
    type=FieldType.TEXT,
    required=True,
    max_length=25,
)

RESPONSIVE_SEARCH = AdTypeDefinition(
    id="responsive-search",
    platform="google",
    name="Responsive Search Ad",
    description="Text ads that adapt to show the best combination of headlines and descriptions",
    category="paid",
    icon="search",
    fields=[
        AdFieldDefinition(
            id="headlines",
            name="Headlines",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=30,
            min_count=3,
            max_count=15,
            placeholder="Enter headline",
            help_text="Add 3-15 headlines (30 characters each). More headlines = better optimization.",
        ),
        AdFieldDefinition(
            id="descriptions",
            name="Descriptions",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=90,
            min_count=2,
            max_count=4,
            placeholder="Enter description",
            help_text="Add 2-4 descriptions (90 characters each).",
        ),
        _FINAL_URL,
        AdFieldDefinition(
            id="path1",
            name="Display Path 1",
            type=FieldType.TEXT,
            supports_variables=True,
            max_length=15,
            placeholder="products",
            help_text="First part of the display URL path.",
            group="urls",
        ),
        AdFieldDefinition(
            id="path2",
            name="Display Path 2",
            type=FieldType.TEXT,
            supports_variables=True,
            max_length=15,
            placeholder="shoes",
            help_text="Second part of the display URL path.",
            group="urls",
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits={"headline": 30, "description": 90, "path1": 15, "path2": 15},
        minimum_fields=["headlines", "descriptions", "finalUrl"],
        platform_rules=[
            "Headlines must be unique",
            "Avoid excessive capitalization",
            "No exclamation marks in headlines",
        ],
    ),
    features=AdTypeFeatures(supports_keywords=True),
    rule_set="google.responsive-search",
    preview_component="GoogleSearchAdPreview",
)

RESPONSIVE_DISPLAY = AdTypeDefinition(
    id="responsive-display",
    platform="google",
    name="Responsive Display Ad",
    description="Visual ads that automatically adjust size and format for display network",
    category="paid",
    icon="image",
    fields=[
        AdFieldDefinition(
            id="headlines",
            name="Headlines",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=30,
            min_count=1,
            max_count=5,
        ),
        AdFieldDefinition(
            id="longHeadline",
            name="Long Headline",
            type=FieldType.TEXT,
            required=True,
            supports_variables=True,
            max_length=90,
            help_text="This headline may appear alone or with your description.",
        ),
        AdFieldDefinition(
            id="descriptions",
            name="Descriptions",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=90,
            min_count=1,
            max_count=5,
        ),
        _BUSINESS_NAME,
        _FINAL_URL,
        AdFieldDefinition(
            id="callToAction",
            name="Call to Action",
            type=FieldType.SELECT,
            options=_DISPLAY_CTA_OPTIONS,
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="landscapeImages",
            name="Landscape Images (1.91:1)",
            type="image",
            required=True,
            min_count=1,
            max_count=15,
            specs=CreativeSpecs(
                aspect_ratios=["1.91:1"],
                recommended_width=1200,
                recommended_height=628,
                min_width=600,
                min_height=314,
                max_file_size=5_000_000,
                allowed_formats=["jpg", "png", "gif"],
            ),
            help_text="Recommended: 1200x628. Minimum: 600x314.",
        ),
        CreativeRequirement(
            id="squareImages",
            name="Square Images (1:1)",
            type="image",
            required=True,
            min_count=1,
            max_count=15,
            specs=CreativeSpecs(
                aspect_ratios=["1:1"],
                recommended_width=1200,
                recommended_height=1200,
                min_width=300,
                min_height=300,
                max_file_size=5_000_000,
                allowed_formats=["jpg", "png", "gif"],
            ),
            help_text="Recommended: 1200x1200. Minimum: 300x300.",
        ),
        CreativeRequirement(
            id="logos",
            name="Logos",
            type="image",
            min_count=0,
            max_count=5,
            specs=CreativeSpecs(
                aspect_ratios=["1:1", "4:1"],
                recommended_width=1200,
                recommended_height=1200,
                min_width=128,
                min_height=128,
                max_file_size=5_000_000,
                allowed_formats=["jpg", "png", "gif"],
            ),
            help_text="Square (1:1) or landscape (4:1) logos.",
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits={"headline": 30, "longHeadline": 90, "description": 90, "businessName": 25},
    ),
    rule_set="google.responsive-display",
    preview_component="GoogleDisplayAdPreview",
)

PERFORMANCE_MAX = AdTypeDefinition(
    id="performance-max",
    platform="google",
    name="Performance Max",
    description="AI-powered campaigns across all Google channels",
    category="paid",
    icon="rocket",
    fields=[
        AdFieldDefinition(
            id="headlines",
            name="Headlines",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=30,
            min_count=3,
            max_count=5,
        ),
        AdFieldDefinition(
            id="longHeadlines",
            name="Long Headlines",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=90,
            min_count=1,
            max_count=5,
        ),
        AdFieldDefinition(
            id="descriptions",
            name="Descriptions",
            type=FieldType.ARRAY,
            required=True,
            supports_variables=True,
            max_length=90,
            min_count=2,
            max_count=5,
        ),
        _BUSINESS_NAME,
        _FINAL_URL,
        AdFieldDefinition(
            id="callToAction",
            name="Call to Action",
            type=FieldType.SELECT,
            options=_PMAX_CTA_OPTIONS,
        ),
    ],
    creatives=[
        CreativeRequirement(
            id="images",
            name="Images",
            type="image",
            required=True,
            min_count=1,
            max_count=20,
            specs=CreativeSpecs(
                aspect_ratios=["1.91:1", "1:1", "4:5"],
                max_file_size=5_000_000,
                allowed_formats=["jpg", "png"],
            ),
        ),
        CreativeRequirement(
            id="logos",
            name="Logos",
            type="image",
            required=True,
            min_count=1,
            max_count=5,
            specs=CreativeSpecs(aspect_ratios=["1:1", "4:1"], max_file_size=5_000_000),
        ),
        CreativeRequirement(
            id="videos",
            name="Videos",
            type="video",
            min_count=0,
            max_count=5,
            specs=CreativeSpecs(
                aspect_ratios=["16:9", "1:1", "9:16"],
                max_duration=60,
                max_file_size=256_000_000,
            ),
        ),
    ],
    constraints=AdTypeConstraints(
        character_limits={"headline": 30, "longHeadline": 90, "description": 90, "businessName": 25},
    ),
    features=AdTypeFeatures(supports_multiple_ads=False),
    rule_set="google.performance-max",
    preview_component="GooglePMaxPreview",
)

GOOGLE_AD_TYPES: tuple[AdTypeDefinition, ...] = (
    RESPONSIVE_SEARCH,
    RESPONSIVE_DISPLAY,
    PERFORMANCE_MAX,
)
