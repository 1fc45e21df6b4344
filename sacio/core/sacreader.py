#
# Read a SAC file into memory
#

import sys
import logging

from sacio.core import sac_h

PROG_VERSION = '2026.292'
LOGGER = logging.getLogger(__name__)

# Header versions that are believable when guessing the byte order
MIN_VERSION = 1
MAX_VERSION = 20


def plausible_version(version):
    return MIN_VERSION <= version <= MAX_VERSION


def guess_byteorder(buf, byteorder=sys.byteorder):
    '''
       Guess the byte order of a raw SAC file from its header version.
       Start with byteorder and try the other one if nvhdr makes no sense
       there. If neither works byteorder is returned.
    '''
    if len(buf) < sac_h.HEADER_SIZE:
        return byteorder

    if plausible_version(sac_h.header_version(buf, byteorder)):
        return byteorder

    other = sac_h.swap_byteorder(byteorder)
    if plausible_version(sac_h.header_version(buf, other)):
        LOGGER.debug("Header version makes sense as {0} endian, "
                     "not {1}.".format(other, byteorder))
        return other

    return byteorder


def read_file(infile):
    try:
        with open(infile, 'rb') as fh:
            return fh.read()
    except (IOError, OSError) as e:
        raise sac_h.SacIOError(
            "Failed to read {0}: {1}".format(infile, e)) from e


class Reader(object):
    """
    Holds the raw contents of a SAC file.

    The whole file is read at once. If byteorder is None it is guessed
    from the header.
    """

    def __init__(self, infile, byteorder=None):
        self.infile = infile
        self.buf = read_file(infile)
        if byteorder is None:
            self.byteorder = guess_byteorder(self.buf)
        else:
            self.byteorder = sac_h.check_byteorder(byteorder)

        LOGGER.debug("Read {0} bytes from {1}".format(len(self.buf), infile))

    def header_bytes(self):
        if len(self.buf) < sac_h.HEADER_SIZE:
            raise sac_h.SacDecodeError(
                "{0} is {1} bytes, too short for a SAC header".format(
                    self.infile, len(self.buf)))
        return self.buf[:sac_h.HEADER_SIZE]

    def body_bytes(self):
        return self.buf[sac_h.HEADER_SIZE:]
