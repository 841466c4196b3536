"""Categorizer: topical tags for gate-accepted content."""

from cowconnect.application.interfaces.services import (
    ClassificationServiceError,
    IClassificationClient,
)
from cowconnect.application.services.model_reply import parse_json_reply
from cowconnect.domain.value_objects.core import MediaPayload
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Filter vocabulary offered by the post and workshop filter bars.
CATEGORY_TAGS: tuple[str, ...] = (
    "health",
    "disease",
    "vaccination",
    "treatment",
    "nutrition",
    "feeding",
    "grazing",
    "breeding",
    "calving",
    "dairy",
    "hygiene",
    "shelter",
    "breeds",
    "conservation",
    "organic farming",
    "research",
    "government schemes",
)

CATEGORIZE_PROMPT = """Classify the following post from a community about indigenous
Indian cow breeds into zero or more of these categories:
{vocabulary}

Return only a JSON array of the matching category names, most relevant first,
for example ["health", "grazing"]. Return [] if none apply.

Post:
\"\"\"{text}\"\"\"
"""


class Categorizer:
    """Derives filter tags for accepted content (ICategorizer).

    Only image media is forwarded to the classifier. Classification problems
    never fail the submission; they produce an empty tag list.
    """

    def __init__(self, client: IClassificationClient) -> None:
        self.client = client

    async def categorize(
        self, text: str, image: MediaPayload | None = None
    ) -> list[str]:
        if image is not None and not image.is_image:
            image = None
        prompt = CATEGORIZE_PROMPT.format(
            vocabulary=", ".join(CATEGORY_TAGS), text=text
        )
        try:
            reply = await self.client.generate(prompt, image)
        except ClassificationServiceError as e:
            logger.warning("Categorizer unavailable, continuing without tags: %s", e)
            return []
        return self.interpret(reply)

    @staticmethod
    def interpret(reply: str | None) -> list[str]:
        """Map a raw reply to tags: bare array or {"tags": [...]}, lower-cased, order kept."""
        try:
            data = parse_json_reply(reply)
        except ValueError as e:
            logger.warning("Categorizer got an unparseable reply: %s", e)
            return []
        if isinstance(data, dict):
            data = data.get("tags")
        if not isinstance(data, list):
            return []
        tags: list[str] = []
        for item in data:
            if not isinstance(item, str):
                continue
            tag = item.strip().lower()
            if tag:
                tags.append(tag)
        return tags
