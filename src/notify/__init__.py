"""Phase-change notification components.

`SoundDeviceAudioOutput` lives in `notify.output` and is imported on demand
because sounddevice needs a PortAudio library at import time.
"""

from .chime import NotificationError, chime_for_state, synthesize_tone
from .config import NotifierConfig, NotifierConfigurationError
from .desktop import PlyerDesktopNotifier
from .messages import format_duration, notification_body, phase_message
from .service import AudioOutput, DesktopNotifier, PhaseNotifier

__all__ = [
    "AudioOutput",
    "DesktopNotifier",
    "NotificationError",
    "NotifierConfig",
    "NotifierConfigurationError",
    "PhaseNotifier",
    "PlyerDesktopNotifier",
    "chime_for_state",
    "format_duration",
    "notification_body",
    "phase_message",
    "synthesize_tone",
]
