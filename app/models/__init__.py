from .base import Base
from .user import User
from .profile import Profile, UserRole
from .shift import Shift, ShiftStatus
from .task import Task, TaskPriority, TaskStatus
from .announcement import Announcement, AnnouncementPriority
from .gallery import GalleryPhoto, PhotoLike
