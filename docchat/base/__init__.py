"""Protocol adapter core: models, backends, request/response handling, streaming.

Submodules are imported explicitly by callers; this package keeps no
import-time side effects.
"""
