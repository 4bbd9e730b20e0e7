"""One-class-per-file DTO implementations re-exported by ``docchat.base.models``."""
