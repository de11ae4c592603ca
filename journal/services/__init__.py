from journal.services.auth import AuthService
from journal.services.media import MediaService, UploadResult, generate_storage_key

__all__ = ["AuthService", "MediaService", "UploadResult", "generate_storage_key"]
