from __future__ import annotations

from typing import List, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator


class CharDifference(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=0)
    original: str
    normalized: str

    @model_validator(mode="after")
    def check_differs(self):
        if self.original == self.normalized:
            raise ValueError(f"no difference at position {self.position}")
        return self


class NormalizationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=1)
    original_line: str
    normalized_line: str
    differences: Tuple[CharDifference, ...] = ()

    @model_validator(mode="after")
    def check_differs(self):
        if self.original_line == self.normalized_line:
            raise ValueError(f"line {self.line_number} is already normalized")
        return self


class CheckReport(BaseModel):
    lines_processed: int = 0
    issues: List[NormalizationIssue] = Field(default_factory=list)
    invalid_lines: List[int] = Field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.issues and not self.invalid_lines


class NormalizeFileResult(BaseModel):
    status: Literal["ok", "not_found", "output_error"] = "ok"
    lines_changed: int = Field(default=0, ge=-1)
    lines_processed: int = Field(default=0, ge=0)
    invalid_lines: List[int] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    @classmethod
    def not_found(cls) -> "NormalizeFileResult":
        return cls(status="not_found", lines_changed=-1, lines_processed=0)

    @classmethod
    def output_error(cls) -> "NormalizeFileResult":
        return cls(status="output_error", lines_changed=-1, lines_processed=0)


class CharacterInfo(BaseModel):
    character: str
    code_point: str = Field(examples=["U+00E9"])
    decimal: int
    name: str = ""
    is_nfc: bool
    is_nfkc: bool


class StringInfo(BaseModel):
    text: str
    characters: List[CharacterInfo] = Field(default_factory=list)
    normalized: str
    normalized_hex: str


class StringComparison(BaseModel):
    first: StringInfo
    second: StringInfo
    equivalent: bool


class CompareRequest(BaseModel):
    first: str
    second: str


class CheckResponse(BaseModel):
    filename: str
    lines_processed: int
    issues: List[NormalizationIssue] = Field(default_factory=list)
    invalid_lines: List[int] = Field(default_factory=list)


class NormalizedFile(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class NormalizeResponse(BaseModel):
    normalized_file: NormalizedFile
    report: NormalizeFileResult


class HealthResponse(BaseModel):
    ok: bool = True
