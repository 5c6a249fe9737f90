"""Top-level package for the VoiceNav transit assistant.

VoiceNav turns a spoken route number into a confirmed nearby bus route
and reads its next arrivals aloud. The pipeline is:

    location fix -> nearby stops and routes -> voice channel
        -> route extraction -> match against nearby routes -> announcement

Build a fully wired controller with ``voicenav.container.get_container()``.
"""
