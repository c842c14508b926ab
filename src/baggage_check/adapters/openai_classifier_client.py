"""OpenAI Responses API client for image classification."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from baggage_check.services.classification import ClassifierClient


@dataclass
class OpenAIClassifierClient(ClassifierClient):
    """Classifier client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIClassifierClient":
        """Create an OpenAI classifier client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def classify(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        instructions: str,
        prompt: str,
    ) -> str:
        """Call OpenAI Responses API and return the raw output text."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_image",
                            "image_url": image_data_url,
                            "detail": "high",
                        },
                        {"type": "input_text", "text": prompt},
                    ],
                }
            ],
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
