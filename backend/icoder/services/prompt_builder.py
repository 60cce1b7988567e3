# icoder/services/prompt_builder.py
from __future__ import annotations

from typing import Dict, Iterable, List

from icoder.core.prompt import USER_PROMPT_TEMPLATE


def build_user_prompt(file_names: Iterable[str], chat_history: str, user_message: str) -> str:
    return USER_PROMPT_TEMPLATE.format(
        file_names=", ".join(file_names),
        chat_history=chat_history,
        user_message=user_message,
    )


def build_model_messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
