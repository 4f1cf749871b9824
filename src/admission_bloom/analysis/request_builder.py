"""
Builds the single multi-part inference request for an image.
"""
from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage
from langchain_core.prompts import PromptTemplate

from ..schemas import AnalysisRequest, EncodedImage
from .prompts import FLOWER_READING_PROMPT


class AnalysisRequestBuilder:
    """
    Combines an EncodedImage with the fixed reading prompt.
    
    Pure and deterministic: the same image always yields an equal request.
    """

    def __init__(self, prompt: Optional[PromptTemplate] = None):
        """
        :param prompt: Fixed template without input variables (defaults to FLOWER_READING_PROMPT)
        """
        prompt = prompt or FLOWER_READING_PROMPT
        if prompt.input_variables:
            raise ValueError(
                f"Reading prompt must be fixed, found variables: {prompt.input_variables}"
            )
        self._prompt_text = prompt.format().strip()

    @property
    def prompt_text(self) -> str:
        return self._prompt_text

    def build(self, image: EncodedImage) -> AnalysisRequest:
        return AnalysisRequest(image=image, prompt_text=self._prompt_text)


def to_messages(request: AnalysisRequest) -> List[BaseMessage]:
    """
    Convert a request into the chat payload: image part first, then the prompt.
    
    :param request: AnalysisRequest to send
    :return: Single-element list with one multi-part HumanMessage
    """
    return [
        HumanMessage(
            content=[
                {
                    "type": "image_url",
                    "image_url": {"url": request.image.data_url},
                },
                {"type": "text", "text": request.prompt_text},
            ]
        )
    ]
