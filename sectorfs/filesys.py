"""A flat file system on a sector disk: a free-sector bitmap and one directory."""

from __future__ import annotations

from sectorfs.bitmap import BITS_IN_BYTE
from sectorfs.directory import Directory, directory_entry_size
from sectorfs.filehdr import FileHeader, NoSpaceError
from sectorfs.openfile import OpenFile
from sectorfs.pbitmap import PersistentBitmap
from sectorfs.synchdisk import SynchDisk

# Sectors holding the headers of the bitmap and directory files, so that
# they can be found when the disk is mounted.
FREE_MAP_SECTOR = 0
DIRECTORY_SECTOR = 1

# The directory cannot grow, so this bounds the number of files on the disk.
NUM_DIR_ENTRIES = 10


class FileSystemError(Exception):
    """The file system cannot be set up on the given disk."""


class FileSystem:
    """Files with fixed sizes, named in a single directory of ten entries.

    The bitmap of free sectors and the directory are themselves files whose
    headers live in sectors 0 and 1.  With ``format`` true the disk is
    initialised to an empty file system; otherwise the existing one is used.
    Every operation that changes the disk either succeeds completely or
    leaves the disk as it was.
    """

    def __init__(self, disk: SynchDisk, format: bool) -> None:
        self.disk = disk
        if format:
            self._format()
        self.free_map_file = OpenFile(disk, FREE_MAP_SECTOR)
        self.directory_file = OpenFile(disk, DIRECTORY_SECTOR)
        if format:
            self._free_map.write_back(self.free_map_file)
            self._empty_directory.write_back(self.directory_file)
            del self._free_map, self._empty_directory

    @property
    def free_map_file_size(self) -> int:
        """Size in bytes of the file holding the free-sector bitmap."""
        return self.disk.num_sectors // BITS_IN_BYTE

    @staticmethod
    def directory_file_size() -> int:
        """Size in bytes of the file holding the directory."""
        return directory_entry_size() * NUM_DIR_ENTRIES

    def _format(self) -> None:
        if self.disk.num_sectors <= DIRECTORY_SECTOR:
            raise FileSystemError("disk is too small to hold a file system")
        free_map = PersistentBitmap(self.disk.num_sectors)
        map_header = FileHeader(self.disk)
        dir_header = FileHeader(self.disk)
        free_map.mark(FREE_MAP_SECTOR)
        free_map.mark(DIRECTORY_SECTOR)
        try:
            map_header.allocate(free_map, self.free_map_file_size)
            dir_header.allocate(free_map, self.directory_file_size())
        except NoSpaceError as exc:
            raise FileSystemError(f"cannot format the disk: {exc}") from exc
        map_header.write_back(FREE_MAP_SECTOR)
        dir_header.write_back(DIRECTORY_SECTOR)
        self._free_map = free_map
        self._empty_directory = Directory(NUM_DIR_ENTRIES)

    def _load_directory(self) -> Directory:
        directory = Directory(NUM_DIR_ENTRIES)
        directory.fetch_from(self.directory_file)
        return directory

    def _load_free_map(self) -> PersistentBitmap:
        return PersistentBitmap(self.disk.num_sectors, self.free_map_file)

    def create(self, name: str, initial_size: int) -> None:
        """Create a file called ``name`` holding ``initial_size`` bytes.

        Raises ``FileExistsError`` if the name is taken and ``NoSpaceError``
        if there is no sector for the header, no free directory entry, or
        not enough room for the data.
        """
        directory = self._load_directory()
        if directory.find(name) is not None:
            raise FileExistsError(name)
        free_map = self._load_free_map()
        sector = free_map.find_and_set()
        if sector is None:
            raise NoSpaceError("no free sector for the file header")
        directory.add(name, sector)
        header = FileHeader(self.disk)
        header.allocate(free_map, initial_size)
        header.write_back(sector)
        directory.write_back(self.directory_file)
        free_map.write_back(self.free_map_file)

    def open(self, name: str) -> OpenFile:
        """Open the file called ``name``; raise ``FileNotFoundError`` if absent."""
        sector = self._load_directory().find(name)
        if sector is None:
            raise FileNotFoundError(name)
        return OpenFile(self.disk, sector)

    def remove(self, name: str) -> None:
        """Delete ``name`` and free its sectors; raise ``FileNotFoundError`` if absent."""
        directory = self._load_directory()
        sector = directory.find(name)
        if sector is None:
            raise FileNotFoundError(name)
        header = FileHeader(self.disk)
        header.fetch_from(sector)
        free_map = self._load_free_map()
        header.deallocate(free_map)
        free_map.clear(sector)
        directory.remove(name)
        free_map.write_back(self.free_map_file)
        directory.write_back(self.directory_file)

    def list(self) -> list[str]:
        """Return the names of all files, in directory order."""
        return self._load_directory().names()

    def dump(self) -> str:
        """Return a listing of the bitmap, the directory and every file."""
        bit_header = FileHeader(self.disk)
        bit_header.fetch_from(FREE_MAP_SECTOR)
        dir_header = FileHeader(self.disk)
        dir_header.fetch_from(DIRECTORY_SECTOR)
        return "".join(
            [
                "Bit map file header:\n",
                bit_header.dump(),
                "Directory file header:\n",
                dir_header.dump(),
                self._load_free_map().dump(),
                self._load_directory().dump(self.disk),
            ]
        )