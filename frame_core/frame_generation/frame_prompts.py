from frame_core.models.brand_profile import BrandProfile


def build_frame_prompt(
    layout_description: str,
    brand_profile: BrandProfile,
    photo_size: str,
    has_logo: bool,
    event_title: str,
) -> str:
    if has_logo:
        logo_rule = "7. DO NOT generate any logos in the top tab area. Leave the top tab area blank for a custom logo."
    else:
        logo_rule = "7. Top logo area (small, in the top-center tab)"

    if event_title:
        title_rule = f'8. DO NOT generate any text in the bottom area. Leave the bottom area blank for the custom text: "{event_title}".'
    else:
        title_rule = "8. Bottom event title area (large text in the bottom border)"

    return f"""Generate an event photo booth frame layout.

CRITICAL LAYOUT RULES:
1. The center area MUST be a massive, completely empty solid WHITE rectangle (representing the photo cutout area: {photo_size}).
2. This empty white rectangle must take up about 80% of the total image area.
3. The bottom border should be thick to accommodate text.
4. The top border should be thick, with a small rounded tab or cutout dipping into the white space in the top-center for a logo.
5. The left and right side borders should be thin.
6. Decorations, patterns, and graphics MUST be strictly confined to the colored borders.
{logo_rule}
{title_rule}
9. The massive center solid white space MUST remain completely untouched and empty.
10. DO NOT generate any fake text or placeholder text anywhere.

Layout description:
{layout_description}

Brand Colors: {brand_profile.colors_text()}
Industry: {brand_profile.industry}
"""
