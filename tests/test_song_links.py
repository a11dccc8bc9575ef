import unittest

from core.services.song_links import SongSource, resolve_song_link, youtube_video_id


class SongLinkTests(unittest.TestCase):
    def test_youtube_watch_url(self):
        link = resolve_song_link("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10")
        self.assertIs(link.source, SongSource.YOUTUBE)
        self.assertEqual(link.video_id, "dQw4w9WgXcQ")
        self.assertEqual(
            link.embed_url, "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1&playsinline=1&mute=0"
        )

    def test_youtube_short_and_embed_urls(self):
        self.assertEqual(youtube_video_id("https://youtu.be/dQw4w9WgXcQ"), "dQw4w9WgXcQ")
        self.assertEqual(youtube_video_id("https://www.youtube.com/embed/dQw4w9WgXcQ"), "dQw4w9WgXcQ")

    def test_spotify_gets_embed_segment(self):
        link = resolve_song_link("https://open.spotify.com/track/abc")
        self.assertIs(link.source, SongSource.SPOTIFY)
        self.assertEqual(link.embed_url, "https://open.spotify.com/embed/track/abc")

    def test_spotify_embed_left_alone(self):
        link = resolve_song_link("https://open.spotify.com/embed/track/abc")
        self.assertEqual(link.embed_url, "https://open.spotify.com/embed/track/abc")

    def test_other_links_are_external(self):
        link = resolve_song_link("https://example.com/song")
        self.assertIs(link.source, SongSource.EXTERNAL)
        self.assertIsNone(link.embed_url)

    def test_blank_is_none(self):
        self.assertIsNone(resolve_song_link("  "))
        self.assertIsNone(resolve_song_link(None))


if __name__ == "__main__":
    unittest.main()
