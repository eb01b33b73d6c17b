"""Built-in agents."""

from unoarena.agents.llm_agent import LLMAgent
from unoarena.agents.human_agent import HumanAgent
from unoarena.agents.random_agent import RandomAgent

__all__ = ["LLMAgent", "HumanAgent", "RandomAgent"]
