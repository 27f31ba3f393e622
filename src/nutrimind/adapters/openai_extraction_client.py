"""OpenAI Responses API client for free-text extraction."""

from dataclasses import dataclass

from openai import APIError, AsyncOpenAI

from nutrimind.domain.extraction import ExtractionReply
from nutrimind.errors import MissingCredentialError, ServiceError
from nutrimind.services.extraction import ExtractionClient


@dataclass
class OpenAIExtractionClient(ExtractionClient):
    """Extraction client backed by the OpenAI Responses API with web search."""

    client: AsyncOpenAI | None

    @classmethod
    def create(cls, api_key: str | None) -> "OpenAIExtractionClient":
        """Create a client; a missing key only fails when a request is made."""
        if not api_key:
            return cls(client=None)
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        text: str,
        web_search: bool,
    ) -> ExtractionReply:
        """Call the Responses API and collect url citations from the output."""
        if self.client is None:
            raise MissingCredentialError("OpenAI API key is not configured")
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": text,
            "store": store,
        }
        if web_search:
            request_payload["tools"] = [{"type": "web_search"}]
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except APIError as exc:
            raise ServiceError(f"OpenAI request failed: {exc}") from exc
        return ExtractionReply(
            text=response.output_text or "",
            citation_urls=_citation_urls(response),
        )

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self.client is not None:
            await self.client.close()


def _citation_urls(response: object) -> list[str]:
    """Return url citations in output order, duplicates included."""
    urls: list[str] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            for annotation in getattr(content, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                url = getattr(annotation, "url", None)
                if url:
                    urls.append(url)
    return urls
