"""One-class-per-file backend implementations re-exported by ``docchat.base.backends``."""
