from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

WorkMode = Literal["Remote", "On-site", "Hybrid"]
JobType = Literal["internship", "job"]
JobStatus = Literal["active", "inactive"]
JobSource = Literal["live", "mock", "local", "fallback"]


class JobPosting(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    company: str
    location: str = ""
    description: str = ""
    workMode: WorkMode = "On-site"
    compensation: str | None = None
    sourceAt: datetime | None = None
    duration: str | None = None
    applyBy: str | None = None
    link: str | None = None
    logo: str | None = None
    source: JobSource = "local"
    type: JobType | None = None
    requiredSkills: list[str] = Field(default_factory=list)
    experienceLevel: str | None = None
    isPaid: bool = False
    salaryMin: int | None = None
    salaryMax: int | None = None
    status: JobStatus = "active"
    postedBy: str | None = None
    createdAt: datetime | None = None


class JobCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=20000)
    type: JobType
    workMode: WorkMode = "On-site"
    isPaid: bool = False
    salaryMin: int | None = Field(default=None, ge=0)
    salaryMax: int | None = Field(default=None, ge=0)
    requiredSkills: list[str] = Field(default_factory=list, max_length=50)
    experienceLevel: str | None = Field(default=None, max_length=100)
    status: JobStatus = "active"


class JobUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    company: str | None = Field(default=None, min_length=1, max_length=200)
    location: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=20000)
    type: JobType | None = None
    workMode: WorkMode | None = None
    isPaid: bool | None = None
    salaryMin: int | None = Field(default=None, ge=0)
    salaryMax: int | None = Field(default=None, ge=0)
    requiredSkills: list[str] | None = Field(default=None, max_length=50)
    experienceLevel: str | None = Field(default=None, max_length=100)
    status: JobStatus | None = None


class JobDeleteResponse(BaseModel):
    message: str
