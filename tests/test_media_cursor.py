import unittest

from creatorhub.access.cursor import MediaCursor


class FakePost:
    def __init__(self, media_count):
        self.media = [object() for _ in range(media_count)]


class TestMediaCursor(unittest.TestCase):
    def test_next_clamps_at_last_item(self):
        cursor = MediaCursor(FakePost(3), enabled=True)
        self.assertEqual(cursor.index, 0)
        self.assertEqual([cursor.next() for _ in range(3)], [1, 2, 2])

    def test_previous_clamps_at_first_item(self):
        cursor = MediaCursor(FakePost(3), enabled=True)
        cursor.move_to(2)
        self.assertEqual([cursor.previous() for _ in range(3)], [1, 0, 0])

    def test_locked_cursor_does_not_move(self):
        cursor = MediaCursor(FakePost(3), enabled=False)
        self.assertEqual(cursor.next(), 0)
        self.assertEqual(cursor.move_to(2), 0)
        self.assertFalse(cursor.has_next)
        self.assertFalse(cursor.has_previous)

    def test_rebinding_another_post_resets_index(self):
        first = FakePost(3)
        cursor = MediaCursor(first, enabled=True)
        cursor.next()
        cursor.bind(first)
        self.assertEqual(cursor.index, 1)

        cursor.bind(FakePost(2))
        self.assertEqual(cursor.index, 0)
        self.assertEqual(cursor.count, 2)

    def test_current_follows_index(self):
        post = FakePost(2)
        cursor = MediaCursor(post, enabled=True)
        self.assertIs(cursor.current, post.media[0])
        cursor.next()
        self.assertIs(cursor.current, post.media[1])
        self.assertIsNone(MediaCursor(FakePost(0), enabled=True).current)

    def test_empty_post(self):
        cursor = MediaCursor(FakePost(0), enabled=True)
        self.assertEqual(cursor.next(), 0)
        self.assertEqual(cursor.previous(), 0)
        self.assertEqual(cursor.move_to(4), 0)
        self.assertEqual(
            cursor.to_dict(),
            {"index": 0, "count": 0, "has_next": False, "has_previous": False},
        )

    def test_move_to_clamps(self):
        cursor = MediaCursor(FakePost(3), enabled=True)
        self.assertEqual(cursor.move_to(10), 2)
        self.assertEqual(cursor.move_to(-4), 0)

    def test_dict_posts_are_supported(self):
        cursor = MediaCursor({"media": [1, 2]}, enabled=True)
        self.assertEqual(cursor.next(), 1)
        self.assertTrue(cursor.has_previous)


if __name__ == "__main__":
    unittest.main()
