"""
Design Consultant Prompts

Contains the system prompt and request templates used by the design advisor.
The freeform suggestion prompt fixes a markdown layout (title heading, color
palette with hex codes, typography, ...) so the heading and color extraction
downstream can rely on it.
"""

DESIGN_CONSULTANT_SYSTEM_PROMPT = """You are a senior brand and visual design consultant.

Your mission: give specific, actionable design direction that a designer can act on today.

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
GUIDELINES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

✓ Name real typefaces, real brands and concrete hex codes
✓ Tie every recommendation to the industry, audience and purpose given
✓ Keep each item to one line
✓ Use markdown headings exactly as requested

✗ No generic advice ("use good contrast", "be consistent")
✗ No made-up fonts
✗ No bold or italic markers"""


DESIGN_SUGGESTIONS_TEMPLATE = """Provide specific and actionable design recommendations based on these inputs:
- Query: "{query}"
- Industry: "{industry}"
- Font Type: "{font}"
- Color: "{color}"
- Design Style: "{design_style}"
- Audience: "{audience}"
- Purpose: "{purpose}"

Start with a main title that summarizes the design concept.

Provide your response in this format:

# [MAIN TITLE: DESIGN CONCEPT SUMMARY]

## COLOR PALETTE
- Primary: #HEXCODE (short description)
- Secondary: #HEXCODE (short description)
- Accent 1: #HEXCODE (short description)
- Accent 2: #HEXCODE (short description)

## TYPOGRAPHY RECOMMENDATIONS
1. Font Name (style, weight) - specific usage
2. Font Name (style, weight) - specific usage
3. Font Name (style, weight) - specific usage

## BRAND INSPIRATION
1. Brand Name - brief description
2. Brand Name - brief description
3. Brand Name - brief description

## DESIGN LANGUAGE RECOMMENDATIONS
1. Specific design element - explanation
2. Specific design element - explanation
3. Specific design element - explanation

## KEY DESIGN ELEMENTS
1. Element - purpose and impact
2. Element - purpose and impact
3. Element - purpose and impact

## LAYOUT SUGGESTIONS
1. Specific layout for {industry_label} - description
2. Specific layout for {industry_label} - description
3. Specific layout for {industry_label} - description"""


FONT_PAIRINGS_TEMPLATE = """Suggest 3 font pairings for this design brief.

{brief}

Each pairing needs a headline font, a body font and the style or mood it suits.
Only use widely available typefaces (Google Fonts or common system fonts)."""


LAYOUT_SUGGESTIONS_TEMPLATE = """Suggest 3 layouts for this design brief.

{brief}

For each layout give a short name, a description, the key elements it is built from
and the reasoning for why it fits the brief."""


COLOR_PALETTE_TEMPLATE = """Create a color palette of 4-6 colors for this design brief.

{brief}

Return hex codes, a human-friendly name for each color and where to use it
(background, primary action, accent, text, ...)."""


DESIGN_TRENDS_TEMPLATE = """List the 5 most relevant current design trends for this design brief.

{brief}

For each trend give a description, concrete examples and the industries using it most."""


ACCESSIBILITY_TEMPLATE = """Review the accessibility of this design brief and color set.

{brief}
Colors: {colors}

Check the contrast of the likely text/background combinations against WCAG 2.1 AA,
then give concrete recommendations covering color, typography and layout."""


BRAND_GUIDELINES_TEMPLATE = """Draft concise brand guidelines for this design brief.

{brief}

Cover brand voice, logo usage rules, color usage, typography rules and imagery direction."""


INSTAGRAM_TRENDS_TEMPLATE = """List 5 current Instagram visual content trends relevant to this design brief.

{brief}

For each trend give a description, 3-5 hashtags (without #) and content ideas."""
