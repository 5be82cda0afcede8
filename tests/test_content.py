"""Unit tests for projects, announcements and notifications."""

from app.models import Notification, Project
from app.schemas.auth import CallerIdentity
from app.schemas.content import AnnouncementCreate, ProjectCreate, ProjectUpdate
from app.services import announcements, projects
from app.services.rbac import Role
from tests.support import DatabaseTestCase


class TestAnnouncements(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.exec_caller = self.add_user("E1", role="executive", email="e1@example.org", display_name="Eve Exec")
        self.add_user("E2", role="executive")
        self.add_user("U1")
        self.add_user("U2")
        self.add_user("A1", role="admin")

    def test_fans_out_to_members_and_other_executives(self) -> None:
        announcement = announcements.create_announcement(
            self.db,
            self.events,
            self.exec_caller,
            Role.EXECUTIVE,
            AnnouncementCreate(title="  General meeting ", content="Friday 5pm"),
        )
        self.assertEqual(announcement.title, "General meeting")
        self.assertEqual(announcement.created_by_name, "Eve Exec")
        self.assertEqual(announcement.author_role, "executive")

        recipients = sorted(uid for (uid,) in self.db.query(Notification.user_id).all())
        self.assertEqual(recipients, ["E2", "U1", "U2"])

        event = self.system_events("announcement_create")[0]
        self.assertEqual(event.description, "Executive e1@example.org created announcement: General meeting")
        self.assertEqual(event.details["recipients"], 3)

    def test_notifications_are_per_user(self) -> None:
        announcements.create_announcement(
            self.db, self.events, self.exec_caller, Role.EXECUTIVE, AnnouncementCreate(title="T", content="C")
        )
        late_joiner = self.add_user("U3")
        self.assertEqual(announcements.list_notifications(self.db, late_joiner), [])

        u1 = CallerIdentity(uid="U1", email="u1@example.org")
        inbox = announcements.list_notifications(self.db, u1, unread_only=True)
        self.assertEqual(len(inbox), 1)
        announcements.mark_notification_read(self.db, u1, inbox[0].id)
        self.assertEqual(announcements.list_notifications(self.db, u1, unread_only=True), [])

        other = CallerIdentity(uid="U2", email="u2@example.org")
        with self.assertRaises(announcements.NotificationNotFoundError):
            announcements.mark_notification_read(self.db, other, inbox[0].id)


    def test_inactive_users_are_not_notified(self) -> None:
        self.add_user("U9", is_active=False)
        announcements.create_announcement(
            self.db, self.events, self.exec_caller, Role.EXECUTIVE, AnnouncementCreate(title="T", content="C")
        )
        recipients = sorted(uid for (uid,) in self.db.query(Notification.user_id).all())
        self.assertEqual(recipients, ["E2", "U1", "U2"])


class TestProjects(DatabaseTestCase):
    def test_crud_with_events(self) -> None:
        caller = self.add_user("E1", role="executive")
        project = projects.create_project(
            self.db, self.events, caller, ProjectCreate(name=" Orientation week ", priority="high")
        )
        self.assertEqual(project.name, "Orientation week")
        self.assertEqual(project.status, "planning")
        self.assertEqual(project.progress, 0)

        updated = projects.update_project(
            self.db, self.events, caller, project.id, ProjectUpdate(status="in-progress", progress=40)
        )
        self.assertEqual(updated.status, "in-progress")
        self.assertEqual(updated.progress, 40)
        self.assertEqual(updated.priority, "high")

        self.assertEqual(len(projects.list_projects(self.db)), 1)
        projects.delete_project(self.db, self.events, caller, project.id)
        self.assertEqual(self.count(Project), 0)
        with self.assertRaises(projects.ProjectNotFoundError):
            projects.get_project(self.db, project.id)

        types = [e.type for e in self.system_events()]
        self.assertEqual(types, ["project_create", "project_update", "project_delete"])
