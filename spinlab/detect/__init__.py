"""Package to detect spindles and to compare detections.
"""
from .events import (detect_start_end, within_duration, merge_close,
                     remove_duplicate, make_detection)
from .spindle import DetectSpindle
from .agreement import consensus, match_events
