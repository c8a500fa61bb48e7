"""Initializes the prompts module and aggregates the static texts from all submodules."""

from .system import get_prompts as get_system_prompts


def get_prompts() -> dict[str, str]:
    """
    Returns a dictionary of all available static texts.
    """
    prompts = {}
    prompts.update(get_system_prompts())
    return prompts
