from .bookmark import Bookmark
from .storage_item import StorageItem
