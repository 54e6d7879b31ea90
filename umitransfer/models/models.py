from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from umitransfer.core.constants import DEFAULT_UMI_DELIMITER


@dataclass
class TransferResult:
    """Result of a UMI transfer run."""

    output_read1: Path
    output_read2: Path
    num_records: int = 0


class TransferConfig(BaseModel):
    """Configuration for transferring UMIs from an index read into paired reads.

    Output paths are taken from ``out``/``out2`` if given, else from
    ``prefix`` as ``<prefix>1``/``<prefix>2``, else derived from the input
    names. In every case the extension is rectified to match ``gzip``.
    """

    r1_in: Path
    r2_in: Path
    ru_in: Path

    out: Path | None = None
    out2: Path | None = None
    prefix: str | None = None

    gzip: bool = False
    force: bool = False
    delim: str = DEFAULT_UMI_DELIMITER
    edit_nr: int | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("delim")
    @classmethod
    def validate_delim(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError(f"UMI delimiter must not contain whitespace, got {v!r}")
        return v

    @field_validator("edit_nr")
    @classmethod
    def validate_edit_nr(cls, v: int | None) -> int | None:
        if v is not None and not 0 <= v <= 9:
            raise ValueError(f"Read number must be a single digit between 0 and 9, got {v}")
        return v

    @model_validator(mode="after")
    def validate_outputs(self) -> TransferConfig:
        """Prefix and explicit output paths are mutually exclusive."""
        if self.prefix is not None and (self.out is not None or self.out2 is not None):
            raise ValueError("Use either a prefix or explicit output paths, not both.")
        return self
