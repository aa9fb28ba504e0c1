from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ELIGIBILITY_THRESHOLD = 70


class LearningResource(BaseModel):
    name: str
    url: str


class Certification(LearningResource):
    provider: str | None = None
    isFree: bool | None = None


class JobSummaryInput(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    company: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, max_length=20000)
    location: str | None = Field(default=None, max_length=300)


class EligibilityRequest(BaseModel):
    job: JobSummaryInput
    userSkills: list[str] | None = Field(default=None, max_length=200)


class InterviewQuestion(BaseModel):
    question: str
    category: str | None = None
    difficulty: str | None = None
    tips: str | None = None


class RoadmapPhase(BaseModel):
    title: str
    skills: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    youtubePlaylist: LearningResource | None = None
    resources: list[LearningResource] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)


class Roadmap(BaseModel):
    title: str = "Path to becoming eligible"
    duration: str | None = None
    steps: list[RoadmapPhase] = Field(default_factory=list)


class EligibilityReport(BaseModel):
    score: int = Field(ge=0, le=100)
    isEligible: bool
    matchedSkills: list[str] = Field(default_factory=list)
    missingSkills: list[str] = Field(default_factory=list)
    requiredSkills: list[str] = Field(default_factory=list)
    summary: str = ""
    interviewQuestions: list[InterviewQuestion] = Field(default_factory=list)
    roadmap: Roadmap | None = None
    curatedResources: dict[str, list[LearningResource]] = Field(default_factory=dict)


class AnalyzeRequest(BaseModel):
    jdText: str = Field(min_length=1, max_length=50000)


class AnalyzeResponse(BaseModel):
    title: str = ""
    company: str = ""
    location: str = ""
    matchPercentage: int = Field(ge=0, le=100)
    matchedSkills: list[str] = Field(default_factory=list)
    missingSkills: list[str] = Field(default_factory=list)
    isEligible: bool
    advice: str = ""


class RoadmapRequest(BaseModel):
    dreamJob: str = Field(min_length=1, max_length=200)


class CareerRoadmapPhase(BaseModel):
    month: str
    topics: list[str] = Field(default_factory=list)
    actionItems: list[str] = Field(default_factory=list)


class CareerRoadmap(BaseModel):
    dreamJob: str
    phases: list[CareerRoadmapPhase] = Field(default_factory=list)
    recommendedResources: list[LearningResource] = Field(default_factory=list)


class InterviewQuestionsRequest(BaseModel):
    role: str = Field(min_length=1, max_length=200)


class InterviewQuestionsResponse(BaseModel):
    role: str
    questionsByRound: dict[str, list[dict[str, Any]]]
    totalQuestions: int


class ChatHistoryItem(BaseModel):
    role: Literal["user", "model", "assistant", "system"]
    content: str | None = None
    parts: list[dict[str, Any]] | None = None


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4000)
    chatHistory: list[ChatHistoryItem] | None = Field(default=None, max_length=50)


class ChatResponse(BaseModel):
    text: str
