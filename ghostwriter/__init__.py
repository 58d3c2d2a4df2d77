"""
Ghostwriter - turn-based human/AI collaborative writing
"""

__version__ = "0.1.0"

# Export central configuration
from .config import config, GhostwriterConfig
from .settings import SessionSettings

# Export logging utilities
from .logging_config import get_logger, GhostwriterLogger

# Export exceptions
from .exceptions import (
    GhostwriterError,
    ProviderError,
    ConcurrentStreamError,
    StaleResponseError,
    InvalidTransitionError,
    DocumentLockedError,
    ExportError,
    ValidationError,
    ConfigurationError
)

# Core components
from .word_diff import WordDiffEngine, HumanContribution
from .length_policy import ResponseLengthPolicy, LengthSetting, LengthBudget
from .timer import CountdownTimer, TimerState
from .streaming import StreamingRenderer, StreamHandle
from .session import Session, Turn, TurnState, ConversationEntry, GenerationToken
from .document import UISink, InMemoryDocument
from .providers import CompletionProvider, CompletionRequest, CompletionResponse, OpenAIProvider
from .conversation_log import ConversationSink, ConversationRecord, JsonlConversationLog
from .controller import TurnController

__all__ = [
    'config', 'GhostwriterConfig', 'SessionSettings',
    'get_logger', 'GhostwriterLogger',
    'GhostwriterError', 'ProviderError', 'ConcurrentStreamError',
    'StaleResponseError', 'InvalidTransitionError', 'DocumentLockedError',
    'ExportError', 'ValidationError', 'ConfigurationError',
    'WordDiffEngine', 'HumanContribution',
    'ResponseLengthPolicy', 'LengthSetting', 'LengthBudget',
    'CountdownTimer', 'TimerState',
    'StreamingRenderer', 'StreamHandle',
    'Session', 'Turn', 'TurnState', 'ConversationEntry', 'GenerationToken',
    'UISink', 'InMemoryDocument',
    'CompletionProvider', 'CompletionRequest', 'CompletionResponse', 'OpenAIProvider',
    'ConversationSink', 'ConversationRecord', 'JsonlConversationLog',
    'TurnController',
    '__version__'
]
