import json

from django.contrib.auth.models import User
from django.test import TestCase
from django.urls import reverse

from apps.accounts.models import ExperienceLevel, ProfileStatus, Role, UserProfile
from apps.accounts.services import all_lifters, create_user_profile, current_user, update_user_status
from apps.audit.models import AuditAction, AuditLog
from apps.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from apps.core.tests.helpers import login_as, make_admin, make_lifter
from apps.policies.models import Policy
from apps.policies.store import DEFAULT_WEEKLY_QUOTA_INEXPERIENCED


class CreateUserProfileTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='newbie', password='password')

    def test_lifter_gets_default_quota_for_level(self):
        experienced = create_user_profile(self.user, Role.LIFTER, ExperienceLevel.EXPERIENCED)
        self.assertEqual(experienced.weekly_quota, 4)

        other = User.objects.create_user(username='other', password='password')
        inexperienced = create_user_profile(other, Role.LIFTER, ExperienceLevel.INEXPERIENCED)
        self.assertEqual(inexperienced.weekly_quota, 3)

    def test_stored_policy_overrides_default_quota(self):
        Policy.objects.create(key=DEFAULT_WEEKLY_QUOTA_INEXPERIENCED, value='2')
        profile = create_user_profile(self.user, Role.LIFTER, ExperienceLevel.INEXPERIENCED)
        self.assertEqual(profile.weekly_quota, 2)

    def test_setup_is_idempotent(self):
        first = create_user_profile(self.user, Role.LIFTER, ExperienceLevel.EXPERIENCED)
        second = create_user_profile(self.user, Role.LIFTER, ExperienceLevel.INEXPERIENCED)
        self.assertEqual(first.id, second.id)
        self.assertEqual(second.experience_level, ExperienceLevel.EXPERIENCED)
        self.assertEqual(AuditLog.objects.filter(action=AuditAction.USER_PROFILE_CREATED).count(), 1)

    def test_name_and_email_are_stored_on_user(self):
        create_user_profile(self.user, Role.LIFTER, ExperienceLevel.EXPERIENCED,
                            name='Ada Lovelace', email='ada@example.com')
        self.user.refresh_from_db()
        self.assertEqual(self.user.get_full_name(), 'Ada Lovelace')
        self.assertEqual(self.user.email, 'ada@example.com')

    def test_lifter_requires_experience_level(self):
        with self.assertRaises(ValidationError):
            create_user_profile(self.user, Role.LIFTER)
        self.assertFalse(UserProfile.objects.exists())

    def test_admin_role_requires_staff(self):
        with self.assertRaises(AuthorizationError):
            create_user_profile(self.user, Role.ADMIN)

        self.user.is_staff = True
        self.user.save()
        profile = create_user_profile(self.user, Role.ADMIN)
        self.assertIsNone(profile.weekly_quota)

    def test_anonymous_actor_is_rejected(self):
        with self.assertRaises(AuthenticationError):
            create_user_profile(None, Role.LIFTER, ExperienceLevel.EXPERIENCED)


class LifterManagementTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.lifter = make_lifter('lifter')
        self.profile = self.lifter.gym_profile

    def test_admin_freezes_lifter(self):
        update_user_status(self.admin, self.profile.id, ProfileStatus.FROZEN)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.status, ProfileStatus.FROZEN)
        self.assertTrue(AuditLog.objects.filter(
            action=AuditAction.USER_STATUS_UPDATED, entity_id=str(self.profile.id),
        ).exists())

    def test_unknown_status_is_rejected(self):
        with self.assertRaises(ValidationError):
            update_user_status(self.admin, self.profile.id, 'banned')

    def test_unknown_profile(self):
        with self.assertRaises(NotFoundError):
            update_user_status(self.admin, '00000000-0000-0000-0000-000000000000', ProfileStatus.FROZEN)

    def test_lifter_cannot_change_status(self):
        with self.assertRaises(AuthorizationError):
            update_user_status(self.lifter, self.profile.id, ProfileStatus.FROZEN)

    def test_all_lifters_lists_only_lifters(self):
        lifters = all_lifters(self.admin)
        self.assertEqual([l['username'] for l in lifters], ['lifter'])

    def test_current_user_without_profile(self):
        bare = User.objects.create_user(username='bare', password='password')
        self.assertIsNone(current_user(bare))


class AccountViewTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.lifter = make_lifter('lifter')

    def test_login_and_me(self):
        response = self.client.post(
            reverse('accounts:login'),
            data=json.dumps({'username': 'lifter', 'password': 'password'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['role'], Role.LIFTER)

        response = self.client.get(reverse('accounts:me'))
        self.assertEqual(response.json()['user']['username'], 'lifter')

    def test_bad_credentials(self):
        response = self.client.post(
            reverse('accounts:login'),
            data=json.dumps({'username': 'lifter', 'password': 'wrong'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 401)

    def test_me_when_anonymous(self):
        response = self.client.get(reverse('accounts:me'))
        self.assertIsNone(response.json()['user'])

    def test_profile_setup(self):
        login_as(self.client, User.objects.create_user(username='fresh', password='password'))
        response = self.client.post(
            reverse('accounts:profile'),
            data=json.dumps({'role': 'lifter', 'experience_level': 'inexperienced'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['weekly_quota'], 3)

    def test_admin_updates_lifter_status(self):
        login_as(self.client, self.admin)
        profile = self.lifter.gym_profile
        response = self.client.post(
            reverse('accounts:lifter_status', args=[profile.id]),
            data=json.dumps({'status': 'frozen'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        profile.refresh_from_db()
        self.assertEqual(profile.status, ProfileStatus.FROZEN)

    def test_lifter_cannot_list_lifters(self):
        login_as(self.client, self.lifter)
        self.assertEqual(self.client.get(reverse('accounts:lifters')).status_code, 403)
