"""
Machine translation of search input.
"""

import asyncio
import functools
import logging
from typing import Any, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ....core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """
    Protocol for translation services.
    The source language is fixed when the translator is built.
    """

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        ...


class AwsTranslator:
    """
    Translator backed by Amazon Translate.

    The boto3 client is blocking, so each call runs in the event loop's
    default executor.
    """

    def __init__(self, client: Any, source_language: str):
        """
        Args:
            client: boto3 "translate" client, shared across requests
            source_language: Language code of all input text
        """
        self.client = client
        self.source_language = source_language

    @classmethod
    def from_settings(cls, settings) -> "AwsTranslator":
        client = boto3.client("translate", region_name=settings.aws_region)
        return cls(client, settings.translate_source_language)

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        """
        Translate text into target_language.

        Returns:
            Optional[str]: Translated text, None when the service returned none

        Raises:
            UpstreamServiceError: If the translation call fails
        """
        if not text:
            return None

        call = functools.partial(
            self.client.translate_text,
            Text=text,
            SourceLanguageCode=self.source_language,
            TargetLanguageCode=target_language,
        )
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, call)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Translation {self.source_language}->{target_language} failed: {e}")
            raise UpstreamServiceError("translate", str(e)) from e

        return response.get("TranslatedText") or None
