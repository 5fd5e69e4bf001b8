"""Storage location models for the question and run stores."""

from pathlib import Path

from pydantic import BaseModel


class StoreConfig(BaseModel, frozen=True):
    path: Path


class DatasetConfig(BaseModel, frozen=True):
    """Directory holding one ``<dataset_id>.jsonl`` file per dataset."""

    path: Path
