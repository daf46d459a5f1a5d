import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vocab_mastery.domain.vocabulary import AgeRange, Symbol, VocabularyLevel, VocabularySet
from vocab_mastery.models.base import Base
from vocab_mastery.repositories.activity_repository import LearningActivityCatalog
from vocab_mastery.repositories.catalog_repository import VocabularySetCatalog
from vocab_mastery.repositories.goal_repository import InMemoryGoalStore
from vocab_mastery.repositories.mastery_repository import InMemoryMasteryStore
from vocab_mastery.repositories.symbol_repository import SymbolRepository
from vocab_mastery.services.educational_service import EducationalEngine
from vocab_mastery.utils.database import init_db

TEN_SYMBOLS = ["hello", "help", "yes", "no", "more", "done", "please", "thank-you", "sorry", "goodbye"]

SYMBOL_NAMES = {
    "hello": "Hello",
    "help": "Help",
    "yes": "Yes",
    "no": "No",
    "more": "More",
    "done": "Done",
    "please": "Please",
    "thank-you": "Thank you",
    "sorry": "Sorry",
    "goodbye": "Goodbye",
    "book": "Book",
    "pencil": "Pencil",
    "paper": "Paper",
    "teacher": "Teacher",
}


def make_set(set_id, symbols, level=VocabularyLevel.BEGINNER):
    return VocabularySet(
        id=set_id,
        name=set_id.title(),
        description=f"{set_id} 测试词汇集",
        level=level,
        age_range=AgeRange(3, 8),
        symbols=tuple(symbols),
        categories=("Test",),
    )


@pytest.fixture
def set_factory():
    return make_set


@pytest.fixture
def core_set():
    return make_set("core-basic", TEN_SYMBOLS)


@pytest.fixture
def catalog(core_set):
    return VocabularySetCatalog([
        make_set("advanced-set", ["book", "pencil"], VocabularyLevel.ADVANCED),
        core_set,
        make_set("small-set", ["book", "pencil", "paper", "teacher"]),
        make_set("empty-set", []),
    ])


@pytest.fixture
def symbol_lookup():
    return SymbolRepository(Symbol(id=k, name=v) for k, v in SYMBOL_NAMES.items())


@pytest.fixture
def mastery_store():
    return InMemoryMasteryStore()


@pytest.fixture
def goal_store():
    return InMemoryGoalStore()


@pytest.fixture
def engine(catalog, mastery_store, symbol_lookup, goal_store):
    return EducationalEngine(
        catalog=catalog,
        mastery_store=mastery_store,
        symbol_lookup=symbol_lookup,
        goal_store=goal_store,
        activities=LearningActivityCatalog([]),
    )


@pytest.fixture(scope="function")
def db_session():
    """创建内存数据库会话"""
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=db_engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=db_engine)
