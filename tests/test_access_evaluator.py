"""
Unit tests for evaluate_access: pure logic, no app or database.
"""
import itertools
import unittest

from creatorhub.access.evaluator import (
    ContentAccess,
    InvalidInput,
    Viewer,
    evaluate_access,
)


ALL_TRUE = ContentAccess(True, True, True)
ALL_FALSE = ContentAccess(False, False, False)


class TestEvaluateAccess(unittest.TestCase):
    premium = {"id": 1, "is_public": False, "creator_id": "c1"}
    public = {"id": 2, "is_public": True, "creator_id": "c1"}

    def test_public_post_open_to_everyone(self):
        viewers = [
            Viewer.anonymous(),
            Viewer(id="u2", is_owner=False),
            Viewer(id="c1", is_owner=True),
        ]
        for viewer, subscribed in itertools.product(viewers, (True, False)):
            with self.subTest(viewer=viewer, subscribed=subscribed):
                self.assertEqual(evaluate_access(self.public, viewer, subscribed), ALL_TRUE)

    def test_public_post_without_subscription_argument(self):
        self.assertEqual(evaluate_access(self.public, Viewer(id="u2")), ALL_TRUE)

    def test_owner_sees_own_premium_post(self):
        owner = Viewer(id="c1", is_owner=True)
        for subscribed in (True, False):
            with self.subTest(subscribed=subscribed):
                self.assertEqual(evaluate_access(self.premium, owner, subscribed), ALL_TRUE)

    def test_premium_post_locked_without_subscription(self):
        viewer = Viewer(id="u2", is_owner=False)
        self.assertEqual(evaluate_access(self.premium, viewer, False), ALL_FALSE)

    def test_premium_post_open_with_subscription(self):
        viewer = Viewer(id="u2", is_owner=False)
        self.assertEqual(evaluate_access(self.premium, viewer, True), ALL_TRUE)

    def test_anonymous_viewer_never_counts_as_subscribed(self):
        self.assertEqual(evaluate_access(self.premium, Viewer.anonymous(), True), ALL_FALSE)
        self.assertEqual(evaluate_access(self.premium, None, True), ALL_FALSE)

    def test_anonymous_viewer_cannot_claim_ownership(self):
        self.assertEqual(
            evaluate_access(self.premium, Viewer(id=None, is_owner=True), False),
            ALL_FALSE,
        )

    def test_flags_always_move_together(self):
        viewers = [Viewer.anonymous(), Viewer(id="u2"), Viewer(id="c1", is_owner=True)]
        for post, viewer, subscribed in itertools.product(
            (self.premium, self.public), viewers, (True, False)
        ):
            access = evaluate_access(post, viewer, subscribed)
            self.assertEqual(access.can_view_media, access.can_view_full_text)
            self.assertEqual(access.can_view_media, access.can_interact)

    def test_same_inputs_same_output(self):
        viewer = Viewer(id="u2")
        first = evaluate_access(self.premium, viewer, True)
        second = evaluate_access(self.premium, viewer, True)
        self.assertEqual(first, second)

    def test_post_without_media_still_gets_flags(self):
        post = {"is_public": False, "creator_id": "c1", "media": []}
        self.assertEqual(evaluate_access(post, Viewer(id="u2"), True), ALL_TRUE)

    def test_model_like_objects_are_accepted(self):
        class PostRow:
            id = 5
            is_public = False
            creator_id = 7

        self.assertEqual(evaluate_access(PostRow(), Viewer(id=7, is_owner=True)), ALL_TRUE)
        self.assertEqual(evaluate_access(PostRow(), Viewer(id=8)), ALL_FALSE)


class TestFailClosed(unittest.TestCase):
    def test_null_is_public_is_premium(self):
        post = {"is_public": None, "creator_id": "c1"}
        with self.assertLogs("creatorhub.access.evaluator", level="WARNING"):
            self.assertEqual(evaluate_access(post, Viewer(id="u2"), False), ALL_FALSE)

    def test_missing_fields_deny_even_the_subscriber(self):
        for post in ({"creator_id": "c1"}, {"is_public": False}, None):
            with self.subTest(post=post):
                self.assertEqual(evaluate_access(post, Viewer(id="u2"), True), ALL_FALSE)

    def test_truthy_non_boolean_is_not_public(self):
        post = {"is_public": "yes", "creator_id": "c1"}
        self.assertEqual(evaluate_access(post, Viewer(id="u2"), False), ALL_FALSE)

    def test_public_post_needs_no_creator_id(self):
        post = {"is_public": True}
        for viewer in (Viewer.anonymous(), None, Viewer(id="u2")):
            for strict in (False, True):
                with self.subTest(viewer=viewer, strict=strict):
                    self.assertEqual(evaluate_access(post, viewer, strict=strict), ALL_TRUE)

    def test_premium_post_without_creator_id_fails_closed(self):
        post = {"is_public": False}
        with self.assertLogs("creatorhub.access.evaluator", level="WARNING"):
            self.assertEqual(evaluate_access(post, Viewer(id="u2"), True), ALL_FALSE)
        with self.assertRaises(InvalidInput):
            evaluate_access(post, Viewer(id="u2"), True, strict=True)

    def test_strict_mode_raises(self):
        with self.assertRaises(InvalidInput):
            evaluate_access({"creator_id": "c1"}, Viewer(id="u2"), strict=True)
        with self.assertRaises(InvalidInput):
            evaluate_access(None, Viewer(id="u2"), strict=True)

    def test_strict_mode_accepts_valid_post(self):
        post = {"is_public": False, "creator_id": "c1"}
        self.assertEqual(evaluate_access(post, Viewer(id="u2"), True, strict=True), ALL_TRUE)


class TestScenarios(unittest.TestCase):
    post = {"is_public": False, "creator_id": "c1"}

    def test_non_subscriber(self):
        access = evaluate_access(self.post, Viewer(id="u2", is_owner=False), False)
        self.assertEqual(access, ALL_FALSE)
        self.assertTrue(access.locked)

    def test_subscriber(self):
        access = evaluate_access(self.post, Viewer(id="u2", is_owner=False), True)
        self.assertEqual(access, ALL_TRUE)
        self.assertFalse(access.locked)

    def test_creator(self):
        for subscribed in (True, False):
            self.assertEqual(
                evaluate_access(self.post, Viewer(id="c1", is_owner=True), subscribed),
                ALL_TRUE,
            )


class TestViewerForPost(unittest.TestCase):
    def test_owner_detected_from_creator_id(self):
        viewer = Viewer.for_post("c1", {"is_public": False, "creator_id": "c1"})
        self.assertTrue(viewer.is_owner)

    def test_other_viewer_is_not_owner(self):
        viewer = Viewer.for_post("u2", {"is_public": False, "creator_id": "c1"})
        self.assertFalse(viewer.is_owner)

    def test_anonymous_viewer(self):
        viewer = Viewer.for_post(None, {"is_public": False, "creator_id": None})
        self.assertIsNone(viewer.id)
        self.assertFalse(viewer.is_owner)


if __name__ == "__main__":
    unittest.main()
