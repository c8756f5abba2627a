"""
Prompt assembly for tweet improvement and copy-search requests.
"""
import re
from typing import List, Optional

from config import Config
from models.api_models import CopycatRequest
from utils.constants import (
    SINGLE_TWEET_PROMPT,
    THREAD_PROMPT,
    TARGETED_SEARCH_PROMPT,
    OPEN_SEARCH_PROMPT,
    TARGETED_SEARCH_CLOSING,
    OPEN_SEARCH_CLOSING,
    IMPROVE_PROMPT_LAYOUT,
    EMOJI_ON_INSTRUCTION,
    EMOJI_OFF_INSTRUCTION,
    GenerationMode,
    PromptKind,
    SearchMode,
    Patterns
)


class PromptBuilder:
    """Builds the text sent to the model. No I/O happens here."""

    @staticmethod
    def is_thread(text: str, mode: str) -> bool:
        """Explicit mode wins; auto mode picks a thread for long input."""
        if mode == GenerationMode.THREAD:
            return True
        if mode == GenerationMode.SINGLE:
            return False
        return len(text) > Config.THREAD_THRESHOLD

    @staticmethod
    def build_improve_prompt(text: str, add_emojis: bool, mode: str) -> str:
        base_prompt = THREAD_PROMPT if PromptBuilder.is_thread(text, mode) else SINGLE_TWEET_PROMPT
        emoji_instruction = EMOJI_ON_INSTRUCTION if add_emojis else EMOJI_OFF_INSTRUCTION

        return IMPROVE_PROMPT_LAYOUT.format(
            base_prompt=base_prompt,
            emoji_instruction=emoji_instruction,
            text=text
        )

    @staticmethod
    def clean_suspects(suspects: Optional[List[str]]) -> List[str]:
        """Trim handles, drop one leading '@' and skip empty entries."""
        cleaned = []
        for suspect in suspects or []:
            handle = re.sub(Patterns.HANDLE_PREFIX, '', suspect.strip()).strip()
            if handle:
                cleaned.append(handle)
        return cleaned

    @staticmethod
    def build_copycat_prompt(request: CopycatRequest) -> str:
        is_open = request.search_mode == SearchMode.OPEN
        parts = [OPEN_SEARCH_PROMPT if is_open else TARGETED_SEARCH_PROMPT, "\n\n---\n"]

        if request.tweet_url:
            parts.append(f"**ORIGINAL TWEET URL:** {request.tweet_url}\n")
            parts.append("Please search X to find this tweet and extract its content and date.\n\n")

        if request.original_tweet:
            parts.append(f"**ORIGINAL TWEET CONTENT:**\n{request.original_tweet}\n\n")

        if request.original_date:
            parts.append(f"**ORIGINAL TWEET DATE:** {request.original_date.isoformat()}\n\n")

        if not is_open:
            parts.append("**SUSPECTS TO INVESTIGATE:**\n")
            for index, handle in enumerate(PromptBuilder.clean_suspects(request.suspects), start=1):
                parts.append(f"{index}. @{handle}\n")

        parts.append("\n---\n\n")
        parts.append(OPEN_SEARCH_CLOSING if is_open else TARGETED_SEARCH_CLOSING)
        return "".join(parts)

    @staticmethod
    def build(kind: str, **fields) -> str:
        """
        Build a prompt by kind.

        Args:
            kind: PromptKind.TWEET or PromptKind.COPYCAT
            **fields: text, add_emojis and mode (default auto) for TWEET;
                request for COPYCAT

        Returns:
            Prompt text
        """
        if kind == PromptKind.TWEET:
            return PromptBuilder.build_improve_prompt(
                fields["text"],
                fields.get("add_emojis", False),
                fields.get("mode") or GenerationMode.AUTO
            )

        if kind == PromptKind.COPYCAT:
            return PromptBuilder.build_copycat_prompt(fields["request"])

        raise ValueError(f"Unknown prompt kind: {kind}")
