from placement_portal.models.user import User
from placement_portal.models.job import Job
from placement_portal.models.resume import Resume
from placement_portal.models.application import Application
from placement_portal.models.saved_job import SavedJob
from placement_portal.models.notification import Notification

__all__ = ["User", "Job", "Resume", "Application", "SavedJob", "Notification"]
