"""
Attachment file store.

Copies user-picked files into the app-private attachments directory under
a name derived from the attachment id, and removes them again. Binding the
copied file to its project record is done by ProjectService.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os

from config import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class AttachmentStore:
    """File-system side of project attachments."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory or settings.attachments_dir)

    async def ensure_dir(self) -> None:
        await aiofiles.os.makedirs(self.directory, exist_ok=True)

    def target_path(self, attachment_id: str, original_name: str) -> Path:
        """<id>.<extension of the original name>, or bare <id> without one."""
        suffix = Path(original_name).suffix
        return self.directory / f"{attachment_id}{suffix}"

    async def copy_in(self, source: Union[str, Path], attachment_id: str, original_name: str) -> Path:
        """Copy a source file into the attachments directory."""
        await self.ensure_dir()
        target = self.target_path(attachment_id, original_name)

        async with aiofiles.open(source, "rb") as src, aiofiles.open(target, "wb") as dst:
            while True:
                chunk = await src.read(CHUNK_SIZE)
                if not chunk:
                    break
                await dst.write(chunk)

        logger.info(f"Copied attachment {original_name} -> {target}")
        return target

    async def delete_file(self, uri: str) -> bool:
        """
        Remove a stored file.

        Best-effort: failures are logged and reported as False, never raised,
        so a cascading delete can carry on.
        """
        try:
            if await aiofiles.os.path.exists(uri):
                await aiofiles.os.remove(uri)
                logger.debug(f"Deleted attachment file {uri}")
                return True
            return False
        except Exception as e:
            logger.error(f"Error deleting attachment file {uri}: {e}")
            return False

    async def clear(self) -> None:
        """Remove the whole attachments directory."""
        if await aiofiles.os.path.exists(self.directory):
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, shutil.rmtree, self.directory)
            logger.info(f"Removed attachments directory {self.directory}")
