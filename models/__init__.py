"""
Models package exports.
"""
from models.api_models import ImproveTweetRequest, DeleteHistoryRequest, CopycatRequest
from models.result_models import (
    GenerationResult,
    HistoryEntry,
    HistoryRecord,
    CopycatMatch,
    CopycatResult,
    MatchedTweet,
    OriginalTweetInfo
)

__all__ = [
    'ImproveTweetRequest',
    'DeleteHistoryRequest',
    'CopycatRequest',
    'GenerationResult',
    'HistoryEntry',
    'HistoryRecord',
    'CopycatMatch',
    'CopycatResult',
    'MatchedTweet',
    'OriginalTweetInfo'
]
