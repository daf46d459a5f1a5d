from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """应用配置"""

    # 应用配置
    APP_NAME: str = "词汇掌握与评估引擎"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./vocab_mastery.db"

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    LOG_DIR: str = "logs"
    LOG_FILE: str = "vocab_mastery.log"

    # 词汇数据配置
    VOCABULARY_SETS_PATH: str = str(DATA_DIR / "vocabulary_sets.json")
    SYMBOLS_PATH: str = str(DATA_DIR / "symbols.json")
    ACTIVITIES_PATH: str = str(DATA_DIR / "learning_activities.json")

    # 测评生成配置
    RECOGNITION_QUESTION_COUNT: int = 5
    SENTENCE_QUESTION_COUNT: int = 3
    RECOGNITION_DISTRACTORS: List[str] = ["Help", "More", "Done"]

    # 测评评分配置（百分比）
    STRENGTH_THRESHOLD: float = 80.0
    WEAKNESS_THRESHOLD: float = 50.0
    BEGINNER_ACCURACY_CUTOFF: float = 60.0
    INTERMEDIATE_ACCURACY_CUTOFF: float = 85.0
    ASSESSMENT_INTERVAL_DAYS: int = 7

    # 进行中测评缓存配置
    ACTIVE_ASSESSMENT_LIMIT: int = 1000
    COMPLETED_ASSESSMENT_TTL_MINUTES: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# 创建全局配置实例
settings = Settings()
