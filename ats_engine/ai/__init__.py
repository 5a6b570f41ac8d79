from .config import AIConfig, load_ai_config
from .credentials import ApiKeySource
from .factory import get_completion_client
from .parsing import Failure, Outcome, Success, invoke_and_parse, parse_json_object, strip_code_fence
from .types import CompletionClient

__all__ = [
    "AIConfig",
    "load_ai_config",
    "ApiKeySource",
    "CompletionClient",
    "get_completion_client",
    "Outcome",
    "Success",
    "Failure",
    "invoke_and_parse",
    "parse_json_object",
    "strip_code_fence",
]
