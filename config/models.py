"""
Model configuration for the Macr0 bot.

Centralized Gemini model definitions used by the LLM client.
Change models here to update them everywhere.
"""

# LLM model (text + vision)
LLM_MODEL = "gemini-1.5-flash"

# Decoding
LLM_TEMPERATURE = 0.7
LLM_TOP_K = 1

# Safety categories; every one is set to BLOCK_NONE
SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]
SAFETY_THRESHOLD = "BLOCK_NONE"
