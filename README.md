# sectorfs

sectorfs is a small, flat file system. It keeps its data in the fixed-size
sectors of a simulated disk and has one directory. The layout is the classic
teaching one:

* a free-sector bitmap (`sectorfs.pbitmap.PersistentBitmap`), stored as an
  ordinary file whose header sits in sector 0
* a fixed-size directory (`sectorfs.directory.Directory`) of
  `<name, header sector>` pairs, stored as a file whose header sits in sector 1
* a file header (`sectorfs.filehdr.FileHeader`, an i-node) for each file,
  which lists the file's data sectors directly
* an open file (`sectorfs.openfile.OpenFile`) for reading and writing at byte
  offsets, one whole sector at a time

Files have a fixed size, set when they are created. A file name keeps at most
9 bytes (longer names are cut short), and the directory holds at most 10
files. A file can be no larger than the number of sector pointers that fit in
one header sector times the sector size; `sectorfs.filehdr.max_file_size()`
gives that limit for a sector size.

The package also holds the general-purpose pieces the file system rests on:
`Bitmap` (`sectorfs.bitmap`), `LinkedList` and `SortedList`
(`sectorfs.linkedlist`), and a chained, self-growing `HashTable`
(`sectorfs.hashtable`).

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```python
from sectorfs.synchdisk import SynchDisk
from sectorfs.filesys import FileSystem

disk = SynchDisk(num_sectors=1024, sector_size=128)
fs = FileSystem(disk, format=True)

fs.create("notes", 200)
f = fs.open("notes")
f.write(b"hello, sectors")   # returns the number of bytes written
f.seek(0)
print(f.read(5))             # b'hello'

print(fs.list())             # ['notes']
fs.remove("notes")
```

`FileSystem(disk, format=False)` mounts a file system that is already on the
disk instead of making a new one.

Reads and writes never go past the size a file was given when it was
created. A read or write that starts at or beyond the end of the file moves
no bytes. `read_at` and `write_at` work at a given offset without moving the
file's position.

Errors are raised as exceptions:

* `create` raises `FileExistsError` if the name is taken, and
  `sectorfs.filehdr.NoSpaceError` if there is no free sector for the header,
  no free directory entry, or not enough room for the data.
* `open` and `remove` raise `FileNotFoundError` for an unknown name.
* `FileSystem(..., format=True)` raises `sectorfs.filesys.FileSystemError`
  if the disk is too small to hold the bitmap and the directory.

`FileSystem.dump()` returns a text listing of the bitmap, the directory and
the contents of every file; `Bitmap.dump()`, `FileHeader.dump()` and
`Directory.dump(disk)` do the same for their own part.

### Host-backed files

`sectorfs.hostfs.HostFileSystem` offers `create`, `open` and `remove` on
files in the host's own file system, returning `HostOpenFile` objects. It
also keeps a table of up to 20 open files, used by `open_a_file` (returns the
lowest free slot number), `read_a_file`, `write_a_file` and `close_a_file`.
A full table raises `OSError` with `EMFILE`, an unknown slot `OSError` with
`EBADF`, and a read that returns nothing `EOFError`.

### Library self-test

`sectorfs.selftest.lib_self_test()` runs checks on the bitmap, the lists and
the hash table, and returns the names of the structures that passed. It
raises `sectorfs.selftest.SelfTestError` at the first failed check.

## What it does not do

* The disk lives in memory only: `SynchDisk` does not save its sectors to a
  host file, so a file system lasts only as long as its `SynchDisk` object.
* There is no command-line tool; the package is used from Python.
* There is no debug-flag tracing of file system operations.
* Files cannot grow after creation, and there are no sub-directories.