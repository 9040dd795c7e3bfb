from dataclasses import dataclass, field
import os

from .models import ChunkingConfig, TokenChunkingConfig


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    token_chunking: TokenChunkingConfig = field(default_factory=TokenChunkingConfig)
    min_post_chars: int = 40
    max_record_age_hours: float = 1.0

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        chunking_defaults = ChunkingConfig()
        token_defaults = TokenChunkingConfig()

        return cls(
            data_dir=os.environ.get("CHUNKING_DATA_DIR", cls.data_dir),
            chunking=ChunkingConfig(
                chunk_size=_int("CHUNKING_CHUNK_SIZE", chunking_defaults.chunk_size),
                overlap=_int("CHUNKING_OVERLAP", chunking_defaults.overlap),
            ),
            token_chunking=TokenChunkingConfig(
                max_tokens=_int("CHUNKING_MAX_TOKENS", token_defaults.max_tokens),
                overlap=_int("CHUNKING_TOKEN_OVERLAP", token_defaults.overlap),
            ),
            min_post_chars=_int("CHUNKING_MIN_POST_CHARS", cls.min_post_chars),
            max_record_age_hours=_float("CHUNKING_MAX_AGE_HOURS", cls.max_record_age_hours),
        )
