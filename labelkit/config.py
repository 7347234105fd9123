from pydantic_settings import BaseSettings

from labelkit.domain.labels import AutoApplySettings


class Settings(BaseSettings):
    # Storage settings
    local_bookmark_store_path: str = "data/bookmarks.json"

    # Auto-apply settings
    confidence_threshold: float | None = 0.7
    auto_apply_enabled: bool = False
    auto_apply_max_labels: int = 1
    auto_apply_notifications: bool = True

    # Bulk operation settings
    bulk_item_delay_seconds: float = 0.05
    high_confidence_threshold: float = 0.85

    # Duplicate detection settings
    duplicate_threshold: float = 0.7

    # Suggestion provider settings
    anthropic_api_key: str | None = None
    suggestion_model: str = "claude-3-5-sonnet-20241022"
    suggestion_system_message: str = """You are an expert at organizing bookmarks. Suggest short, reusable labels for the bookmarked page.

Each label has a category:
- topic: what the page is about (e.g. Technology, Health)
- type: what kind of page it is (e.g. Documentation, Tutorial, Tool)
- priority: how urgent it is to revisit (e.g. Read Later)

Give every label a confidence between 0 and 1 and a one sentence reasoning.
"""
    max_content_chars: int = 1000
    max_suggested_labels: int = 5

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    def auto_apply_settings(self) -> AutoApplySettings:
        return AutoApplySettings(
            enabled=self.auto_apply_enabled,
            confidence_threshold=self.confidence_threshold,
            max_labels=self.auto_apply_max_labels,
            notifications_enabled=self.auto_apply_notifications,
        )


settings = Settings()
