"""
Loading of project datasets.

A dataset is a JSON document with three lists::

    {
        "tasks": [
            {"id": 0, "duration": 40, "label": "Design",
             "earliest_start_date": "2023-06-01", "planned_resources": 1.0,
             "predecessors": []}
        ],
        "resources": [{"id": 0, "label": "Alice", "output": 8.0}],
        "allocations": [{"taskid": 0, "resourceid": 0, "load": 0.5}]
    }
"""

import json
import logging

from loadplan.config import GENERIC_RESOURCE_OUTPUT
from loadplan.domain.errors import MalformedInputError
from loadplan.domain.project import Project

logger = logging.getLogger(__name__)


def load_project(filename, generic_resource_output=GENERIC_RESOURCE_OUTPUT):
    """
    Read and validate a project dataset.

    Args:
        filename: Path to the JSON file
        generic_resource_output: Effort units per full-time resource and day

    Returns:
        Project: The validated project

    Raises:
        MalformedInputError: If the file cannot be read or fails validation
        MissingReferenceError: If the dataset contains dangling references
    """
    try:
        with open(filename, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise MalformedInputError(f"Cannot read project file {filename}: {e}")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{filename} is not valid UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"{filename} is not a valid project file: {e}")

    project = Project.from_dict(data, generic_resource_output=generic_resource_output)
    project.validate()

    logger.info(
        f"Loaded {filename}: {len(project.tasks)} tasks, "
        f"{len(project.resources)} resources, {len(project.allocations)} allocations"
    )
    return project
