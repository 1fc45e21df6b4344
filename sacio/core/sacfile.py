#
# Read, build and write SAC files.
#
# A SacDocument holds a header, the first and second data components, the
# path of the file and its byte order.
#

import os
import sys
import logging

import numpy as np

from sacio.core import sac_h, sacbody, sacreader, validation

PROG_VERSION = '2026.292'
LOGGER = logging.getLogger(__name__)


def write_file(path, buf):
    '''
       Create or truncate path and write buf with a single call.
    '''
    try:
        with open(path, 'wb') as fh:
            fh.write(buf)
    except (IOError, OSError) as e:
        raise sac_h.SacIOError(
            "Failed to write {0}: {1}".format(path, e)) from e

    LOGGER.debug("Wrote {0} bytes to {1}".format(len(buf), path))


class SacDocument(object):
    """
    A SAC file in memory.

    Header variables are attributes of the document (doc.delta, doc.kstnm,
    doc.t[0], ...). The data is held in first and second, float32 arrays.
    For evenly spaced time series second is empty; for other file types
    first and second are the two components (x and y, real and imaginary,
    amplitude and phase).

    Headers are checked (version and file type) after every full read and
    before every write; setting variables or data never checks anything.

    Example::

        doc = SacDocument.read('seism.sac')
        doc.kstnm = 'CDV'
        doc.set_endian('big')
        doc.write_to('seism_big.sac')
    """
    # Refuse XYZ (grid) files if False. Writes check the document's flag.
    # Reads check the class flag or their allow_xyz argument, which the
    # new document keeps.
    allow_xyz = True

    def __init__(self, path=None, byteorder=None):
        self.header = sac_h.SacHeader()
        self.path = path
        self.first = sacbody.empty_trace()
        self.second = sacbody.empty_trace()
        self.set_endian(byteorder or sys.byteorder)

    def __getattr__(self, name):
        # Only reached for names that are not regular attributes
        header = self.__dict__.get('header')
        if header is not None and name in sac_h.SacHeader.__keys__:
            return getattr(header, name)
        raise AttributeError(
            "'{0}' object has no attribute '{1}'".format(
                type(self).__name__, name))

    def __setattr__(self, name, value):
        if name in sac_h.SacHeader.__keys__:
            setattr(self.header, name, value)
        else:
            object.__setattr__(self, name, value)

    def __repr__(self):
        return ("SacDocument(path={0!r}, byteorder={1!r}, iftype={2!r}, "
                "npts={3}, first={4}, second={5})".format(
                    self.path, self.byteorder, self.iftype, self.npts,
                    len(self.first), len(self.second)))

    @property
    def path(self):
        return self._path

    @path.setter
    def path(self, path):
        self._path = os.fspath(path) if path is not None else None

    @property
    def byteorder(self):
        return self._byteorder

    @property
    def first(self):
        return self._first

    @first.setter
    def first(self, x):
        self._first = np.asarray(x, dtype=np.float32).ravel()

    @property
    def second(self):
        return self._second

    @second.setter
    def second(self, x):
        self._second = np.asarray(x, dtype=np.float32).ravel()

    def set_first(self, x):
        self.first = x

    def set_second(self, x):
        self.second = x

    def set_endian(self, byteorder):
        '''
           Byte order used by the next write: 'little' or 'big'.
        '''
        self._byteorder = sac_h.check_byteorder(byteorder)

    def set_header(self, header):
        self.header = header

    def get_header_field(self, name):
        if name not in sac_h.SacHeader.__keys__:
            raise sac_h.HeaderError(
                "Unknown variable {0} in SAC header".format(name))
        return getattr(self.header, name)

    def set_header_field(self, name, value):
        self.header.set({name: value})

    def get_header_fields(self):
        '''
           All header variables in one dictionary, in layout order.
        '''
        return self.header.get()

    def set_header_fields(self, keyval):
        self.header.set(keyval)

    #
    # Reading
    #
    @classmethod
    def new(cls, path=None, byteorder=None):
        '''
           An empty document: undefined header, no data.
        '''
        return cls(path, byteorder)

    @classmethod
    def from_bytes(cls, buf, byteorder=None, path=None, headonly=False,
                   allow_xyz=None):
        """
        Decode a complete SAC file held in memory.

        :param buf: header followed by the data section
        :param byteorder: 'little', 'big' or None to guess it
        :param path: path to keep on the document
        :param headonly: leave first and second empty and skip the data
        :param allow_xyz: accept XYZ files, None for cls.allow_xyz
        :raises SacDecodeError: buf is shorter than a header
        :raises UnsupportedHeaderVersion, UnsupportedFileType: see
            validation.check_header
        """
        if byteorder is None:
            byteorder = sacreader.guess_byteorder(buf)

        header = sac_h.SacHeader.parse(buf, byteorder)
        if allow_xyz is None:
            allow_xyz = cls.allow_xyz
        validation.check_header(header, allow_xyz=allow_xyz)

        doc = cls(path, byteorder)
        if allow_xyz != cls.allow_xyz:
            doc.allow_xyz = allow_xyz
        doc.header = header
        if not headonly:
            samples = sacbody.parse_floats(buf[sac_h.HEADER_SIZE:], byteorder)
            doc.first, doc.second = sacbody.decode_body(samples, header)

        return doc

    @classmethod
    def read(cls, path, byteorder=None, allow_xyz=None):
        '''
           Read header and data of a SAC file.
        '''
        reader = sacreader.Reader(path, byteorder)
        return cls.from_bytes(reader.buf, reader.byteorder, path,
                              allow_xyz=allow_xyz)

    @classmethod
    def read_header(cls, path, byteorder=None, allow_xyz=None):
        '''
           Read the header of a SAC file, first and second are left empty.
        '''
        reader = sacreader.Reader(path, byteorder)
        return cls.from_bytes(reader.header_bytes(), reader.byteorder, path,
                              headonly=True, allow_xyz=allow_xyz)

    #
    # Writing
    #
    def build_header(self, byteorder=None):
        validation.check_header(self.header, allow_xyz=self.allow_xyz)
        return self.header.build(byteorder or self.byteorder)

    def to_bytes(self, byteorder=None):
        """
        Encode header and data.

        first is written before second. Nothing checks that their lengths
        agree with npts.
        """
        byteorder = byteorder or self.byteorder
        buf = self.build_header(byteorder)
        samples = sacbody.encode_body(self.first, self.second)

        return buf + sacbody.build_floats(samples, byteorder)

    def _require_path(self, path):
        if path is None:
            raise sac_h.SacIOError("No path given for SAC document")
        return os.fspath(path)

    def write(self):
        '''
           Write header and data to path, replacing the file.
        '''
        path = self._require_path(self.path)
        write_file(path, self.to_bytes())

    def write_to(self, path):
        '''
           Write header and data to another file. self.path is not
           changed.
        '''
        write_file(self._require_path(path), self.to_bytes())

    def write_header(self):
        """
        Replace the header of the existing file at path.

        The file is read, its first HEADER_SIZE bytes are replaced by the
        new header and the whole file is written back. The data section is
        kept byte for byte, in whatever byte order it was written. This is
        not atomic; to be safe against crashes copy the file, update the
        copy and rename it over the original.

        :raises SacIOError: the file does not exist or can't be written
        :raises SacDecodeError: the file is shorter than a header
        """
        path = self._require_path(self.path)
        buf = self.build_header()
        reader = sacreader.Reader(path, self.byteorder)
        # No header, nothing to replace
        reader.header_bytes()

        write_file(path, buf + reader.body_bytes())
