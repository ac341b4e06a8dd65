"""Prompt templates and user-facing fallback strings for the floral AI client."""

FLORAL_ARCHITECT_PROMPT = """
You are a Computer Vision AI specialized in detailed visual captioning for image generation models.

**YOUR TASK:**
Look at the input image and output a **SINGLE** paragraph of comma-separated keywords and descriptive phrases that perfectly describe the content for an image generator (like Flux/Midjourney).

**STRICT RULES:**
1.  **Output ONLY the prompt.** No "Here is the prompt", no "Analysis:", no "Option 1".
2.  **Language:** English ONLY (Image models understand English better).
3.  **Detail:** Describe the colors, specific flower types, vase style, lighting, background, and mood.
4.  **Format:** A single block of text.

**EXAMPLE OUTPUT:**
Large bouquet of pink peonies and white hydrangeas in a crystal vase, soft morning light, bokeh background, photorealistic, 8k, cinematic, dew drops on petals, pastel color palette, luxury floral design.
"""

REFINE_PROMPT_TEMPLATE = """
Previous Analysis: {previous}

User Refinement Request: {refinement}

Please update the analysis based on the user's refinement.
Keep the same output format: a single paragraph of comma-separated descriptive phrases, English only, no preamble.
"""

SENTIMENT_PROMPT_TEMPLATE = """
Write a short, heart-warming card message for a flower delivery.

Recipient: {recipient}
Occasion: {occasion}
Tone: {tone}

Language: Spanish.
Max length: {max_words} words.
Make it poetic and sincere.
"""

SENTIMENT_MAX_WORDS = 50

NO_RESPONSE_TEXT = "No response"
ANALYZE_FALLBACK = "Error al conectar con el Arquitecto Floral."
REFINE_FALLBACK = "Error al refinar."
SENTIMENT_FALLBACK_TEMPLATE = "Para {recipient}, con mucho cariño en tu {occasion}."


def build_refine_prompt(previous_analysis: str | None, refinement: str) -> str:
    return REFINE_PROMPT_TEMPLATE.format(previous=previous_analysis or "None", refinement=refinement)


def build_sentiment_prompt(recipient: str, occasion: str, tone: str) -> str:
    return SENTIMENT_PROMPT_TEMPLATE.format(
        recipient=recipient,
        occasion=occasion,
        tone=tone,
        max_words=SENTIMENT_MAX_WORDS,
    )


def sentiment_fallback(recipient: str, occasion: str) -> str:
    return SENTIMENT_FALLBACK_TEMPLATE.format(recipient=recipient, occasion=occasion)
