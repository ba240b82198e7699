"""
Export of generated ideas to a quoted comma-separated file.
"""

import csv
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from ideagen.models.idea import IdeaRecord
from ideagen.utils.constants import EXPORT_FILENAME_PREFIX, EXPORT_HEADER
from ideagen.utils.logger import logger


def export_filename(extension: str, today: Optional[date] = None) -> str:
    """Build a dated file name such as saas-ideas-2024-05-01.csv."""
    today = today or date.today()
    return f"{EXPORT_FILENAME_PREFIX}-{today.isoformat()}.{extension}"


def idea_to_row(idea: IdeaRecord) -> list:
    return [
        idea.title,
        idea.description,
        idea.marketSize.value,
        idea.difficulty.value,
        idea.source or "Unknown",
        "Yes" if idea.isFavorite else "No",
    ]


def export_to_csv(ideas: Iterable[IdeaRecord], path: Optional[Union[str, Path]] = None) -> Path:
    """
    Write ideas to a CSV file with every field quoted.

    Args:
        ideas: Ideas to export, in display order
        path: Destination file, defaults to a dated file in the working directory

    Returns:
        Path of the written file
    """
    path = Path(path) if path is not None else Path(export_filename("csv"))
    ideas = list(ideas)

    try:
        with open(path, 'w', newline='', encoding='utf-8') as file:
            writer = csv.writer(file, quoting=csv.QUOTE_ALL, lineterminator='\n')
            writer.writerow(EXPORT_HEADER)
            for idea in ideas:
                writer.writerow(idea_to_row(idea))
    except OSError as e:
        logger.error(f"Error writing CSV export {path}: {e}")
        raise

    logger.info(f"Exported {len(ideas)} ideas to {path}")
    return path
