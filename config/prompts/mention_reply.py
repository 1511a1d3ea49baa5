"""
Mention Reply Prompt - Fixed phrases woven around the conversation transcript.

Used by PromptAssembler when building the multimodal prompt for a mention.
"""

IMAGE_COUNT_TEMPLATE = "There are {count} images in this conversation. Refer to them as needed. "

CONVERSATION_HEADER = "Here is the conversation:"

IMAGE_LABEL_TEMPLATE = "Image {index}: "

IMAGE_ALT_TEXT_TEMPLATE = "Image alt text: {description}"

UNVIEWABLE_MEDIA_TEMPLATE = "Image {index}: [User uploaded {media} that cannot be viewed]"

MEDIA_ALT_TEXT_SUFFIX = " with alt text: {description}"

TURN_TEMPLATE = "{speaker}: {text}"

CONTINUATION_CUE_TEMPLATE = "{name}:"
