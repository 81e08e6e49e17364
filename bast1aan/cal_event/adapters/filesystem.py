import asyncio

from bast1aan.cal_event.writer import FileSystemAdapter


class LocalFileSystemAdapter(FileSystemAdapter):
    async def write(self, path: str, data: bytes) -> None:
        await asyncio.to_thread(self._write, path, data)

    @staticmethod
    def _write(path: str, data: bytes) -> None:
        # binary, to keep the CRLF line endings as they are
        with open(path, 'wb') as f:
            f.write(data)
