"""Module with an interface for a detector."""

from abc import ABC, abstractmethod

from humanly.data_models import DetectResult


class Detector(ABC):
    """An interface for a LLM-written text detector."""

    @abstractmethod
    async def detect(
        self, text: str | None, *, trusted_human: bool = False
    ) -> DetectResult:
        """
        Score a text sentence by sentence and as a whole.

        Args:
            text (str | None): Text to be evaluated, as sent by the client.
            trusted_human (bool, optional): Caller's claim that the text is
                human-written. It is not verified. Defaults to False.

        Raises:
            ValidationError: Raised if the text is missing, blank, or too long.

        Returns:
            DetectResult: Per-sentence judgments with the overall score.
        """

    def get_name(self) -> str:
        """
        Get name of the detector.

        Returns:
            str: Name of the detector.
        """
        return type(self).__name__
