"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Model artifact
    model_path: Optional[str] = None  # Loaded at startup by the API and classify CLI
    persist_learned_centroids: bool = False  # Write adapted centroids back to model_path

    # Tokenizer guards
    tokenizer_max_text_length: int = 100_000
    tokenizer_bigram_limit: int = 2000
    tokenizer_min_token_length: int = 2  # exclusive
    tokenizer_max_token_length: int = 20  # exclusive
    tokenizer_bigram_min_word_length: int = 3  # exclusive

    # Field weights for the term-frequency accumulator
    weight_body: float = 1.0
    weight_subject: float = 5.0
    weight_sender: float = 10.0

    # Vocabulary pruning
    vocabulary_min_doc_freq: int = 3
    vocabulary_large_corpus_size: int = 100  # corpus size above which pruning applies

    # Incremental learning
    learning_rate: float = 0.2
    learn_min_body_length: int = 20

    # Classification
    confidence_threshold: float = 0.05
    fallback_promotion_markers: str = "no-reply,info,newsletter"  # Comma-separated

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def promotion_markers(self) -> List[str]:
        """Sender substrings that route a low-confidence message to Promotion."""
        return [m.strip().lower() for m in self.fallback_promotion_markers.split(",") if m.strip()]


# Global settings instance
settings = Settings()
