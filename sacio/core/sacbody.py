#
# Data section of a SAC file: raw samples to and from the first and
# second components.
#

import logging
import sys

import numpy as np

from sacio.core import sac_h

PROG_VERSION = '2026.292'
LOGGER = logging.getLogger(__name__)

SAMPLE_SIZE = 4


def _dtype(byteorder):
    if sac_h.check_byteorder(byteorder) == 'little':
        return np.dtype('<f4')
    return np.dtype('>f4')


def empty_trace():
    return np.zeros(0, dtype=np.float32)


def parse_floats(buf, byteorder=sys.byteorder):
    '''
       Unpack 32 bit floats. A partial sample at the end is dropped.
    '''
    n, extra = divmod(len(buf), SAMPLE_SIZE)
    if extra:
        LOGGER.warning(
            "Ignoring {0} trailing byte(s) after {1} samples.".format(
                extra, n))
    if n == 0:
        return empty_trace()

    ret = np.frombuffer(buf, dtype=_dtype(byteorder), count=n)

    return ret.astype(np.float32)


def build_floats(x, byteorder=sys.byteorder):
    return np.asarray(x, dtype=_dtype(byteorder)).tobytes()


def decode_body(samples, header):
    """
    Split the samples of a data section into the first and second
    components.

    Evenly spaced time series carry only the dependent variable, so every
    sample goes to first. All other files hold npts values of the first
    component followed by the second (the independent variable of an XY
    file, the imaginary part or phase of a spectrum).

    If there are fewer samples than npts says, they all go to first and
    second is empty.

    :param samples: 1-D float32 array
    :param header: sac_h.SacHeader
    :returns: (first, second)
    """
    iftype = sac_h.file_type(int(header.iftype))
    if iftype == sac_h.FileType.TIME and header.leven:
        return samples, empty_trace()

    npts = header.npts
    if npts < 0 or npts > len(samples):
        LOGGER.warning(
            "Header gives npts = {0} but data holds {1} samples, "
            "reading them all into the first component.".format(
                npts, len(samples)))
        return samples, empty_trace()

    return samples[:npts], samples[npts:]


def encode_body(first, second):
    return np.concatenate((np.asarray(first, dtype=np.float32),
                           np.asarray(second, dtype=np.float32)))
