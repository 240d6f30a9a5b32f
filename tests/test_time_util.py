from datetime import timedelta

from coursemux.utils import time_util

PROBE_LOG = """Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'clip.mp4':
  Metadata:
    major_brand     : isom
  Duration: 00:02:05.47, start: 0.000000, bitrate: 389 kb/s
Input #1, srt, from 'clip.srt':
  Duration: 00:02:10.00, start: 0.000000, bitrate: N/A
"""


def test_find_duration_uses_first_occurrence():
    assert time_util.find_duration(PROBE_LOG) == timedelta(minutes=2, seconds=5, milliseconds=470)


def test_find_duration_missing_or_not_a_time():
    assert time_util.find_duration("Input #0, mov\n") is None
    assert time_util.find_duration("  Duration: N/A, bitrate: N/A\n") is None


def test_parse_hms_hours_and_fraction():
    assert time_util.parse_hms("1:02:03.5") == timedelta(hours=1, minutes=2, seconds=3, milliseconds=500)
    assert time_util.parse_hms("00:00:10") == timedelta(seconds=10)
    assert time_util.parse_hms("garbage") is None


def test_to_milliseconds_truncates():
    assert time_util.to_milliseconds(timedelta(seconds=10)) == 10000
    assert time_util.to_milliseconds(timedelta(microseconds=1999)) == 1
    assert time_util.to_milliseconds(timedelta(seconds=1, microseconds=999999)) == 1999
