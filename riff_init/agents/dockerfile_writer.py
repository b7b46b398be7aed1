"""
Writes the generated Dockerfile next to the function source.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config import DOCKERFILE_NAME
from ..errors import DockerfileExists
from ..options import InitOptions
from ..utils.osutils import containing_dir


class DockerfileWriter:
    """Persists Dockerfile content into the function directory."""

    def __init__(self, filename: str = DOCKERFILE_NAME):
        self.filename = filename
        self.logger = logging.getLogger(__name__)

    def target_path(self, options: InitOptions) -> Path:
        return Path(containing_dir(options.function_path)) / self.filename

    def write(
        self,
        options: InitOptions,
        content: str,
        dry_run: bool = False,
        force: bool = False
    ) -> Optional[Path]:
        """Write `content` and return its path, or print it and return None on a dry run."""

        dockerfile_path = self.target_path(options)

        if dry_run:
            print(f"\n{dockerfile_path}:")
            print(content)
            return None

        if dockerfile_path.exists() and not force:
            raise DockerfileExists(
                f"{dockerfile_path} already exists, use --force to overwrite"
            )

        dockerfile_path.write_text(content)
        self.logger.info("Wrote %s", dockerfile_path)
        return dockerfile_path
