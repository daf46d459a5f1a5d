from pydantic import BaseModel
from typing import List, Optional, Union


class AgeRangeSchema(BaseModel):
    min: int
    max: int


class VocabularySetResponse(BaseModel):
    id: str
    name: str
    description: str
    level: str
    age_range: AgeRangeSchema
    symbols: List[str]
    categories: List[str]
    is_built_in: bool


class LearningStepResponse(BaseModel):
    id: str
    type: str
    symbol_id: str
    description: str
    is_completed: bool
    attempts: int
    success_rate: float
    difficulty: str


class VocabularyProgressResponse(BaseModel):
    user_id: str
    vocabulary_set_id: str
    total_symbols: int
    mastered_symbols: List[str]
    learning_symbols: List[str]
    not_started_symbols: List[str]
    mastery_level: int
    last_assessment: Optional[str] = None
    next_assessment: Optional[str] = None
    learning_path: List[LearningStepResponse]


class NextSymbolsResponse(BaseModel):
    user_id: str
    vocabulary_set_id: str
    symbols: List[str]


class MasteryUpdateRequest(BaseModel):
    # "not-started" / "learning" / "mastered"，或布尔值表示是否掌握
    state: Union[bool, str]


class MasteryUpdateResponse(BaseModel):
    user_id: str
    vocabulary_set_id: str
    symbol_id: str
    state: str


class LearningActivityResponse(BaseModel):
    id: str
    name: str
    description: str
    type: str
    difficulty: str
    duration: int
    symbols: List[str]
    categories: List[str]
    age_range: AgeRangeSchema
    learning_objectives: List[str]
    instructions: List[str]
    is_built_in: bool
