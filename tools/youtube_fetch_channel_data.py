#!/usr/bin/env python3
"""
YouTube Recent Uploads Fetcher
Fetches a channel's recent uploads with statistics from YouTube Data API v3

Usage:
    python3 -m tools.youtube_fetch_channel_data "https://youtube.com/@channelname"
"""

import sys
import os
import json
import time
from datetime import datetime, timezone
from pathlib import Path

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta
from dotenv import load_dotenv
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tools.youtube_channel_resolver import KIND_ID, resolve_channel_identifier

# Load environment variables
load_dotenv()

VIDEO_BATCH_SIZE = 50


class ChannelLookupError(Exception):
    """Base class for every failure in the fetch chain."""


class InvalidIdentifierError(ChannelLookupError, ValueError):
    pass


class ChannelNotFoundError(ChannelLookupError, ValueError):
    pass


class TransientFetchError(ChannelLookupError):
    pass


def _api_error(e):
    """Translate an HttpError into the fetch error taxonomy."""
    status = getattr(e.resp, 'status', None)
    if status == 403:
        return TransientFetchError("YouTube API quota exceeded. Wait until midnight PT or use a different API key.")
    if status == 404:
        return ChannelNotFoundError("Channel not found.")
    return TransientFetchError(f"YouTube API error: {e}")


class YouTubeChannelFetcher:
    def __init__(self, api_key, youtube=None, log=print):
        """Initialize YouTube API client; progress lines go to log"""
        self.log = log
        self.youtube = youtube or build('youtube', 'v3', developerKey=api_key, cache_discovery=False)
        self.quota_used = 0

    def _execute(self, request, cost=1):
        try:
            response = request.execute()
        except HttpError as e:
            raise _api_error(e) from e
        except OSError as e:
            raise TransientFetchError(f"Network error while contacting YouTube: {e}") from e
        self.quota_used += cost
        return response

    def resolve_channel_id(self, identifier):
        """
        Turn a ChannelIdentifier into a canonical channel ID.

        Handles and usernames are looked up with a channel search; the first
        hit wins. Channel IDs pass through untouched.
        """
        if identifier.kind == KIND_ID:
            return identifier.value

        request = self.youtube.search().list(
            part='snippet',
            type='channel',
            q=identifier.value,
            maxResults=1
        )
        response = self._execute(request, cost=100)  # Search is expensive

        items = response.get('items') or []
        if not items:
            raise ChannelNotFoundError("Channel not found. Please check the URL or handle.")

        return items[0]['snippet']['channelId']

    def fetch_channel_info(self, channel_id):
        """Fetch channel metadata"""
        request = self.youtube.channels().list(
            part='snippet,statistics,contentDetails',
            id=channel_id
        )
        response = self._execute(request)

        items = response.get('items') or []
        if not items:
            raise ChannelNotFoundError("Channel not found.")

        channel = items[0]
        snippet = channel.get('snippet', {})
        statistics = channel.get('statistics', {})

        return {
            'id': channel['id'],
            'title': snippet.get('title', ''),
            'customUrl': snippet.get('customUrl', ''),
            'thumbnails': snippet.get('thumbnails', {}),
            'subscriberCount': int(statistics.get('subscriberCount', 0)),
            'videoCount': int(statistics.get('videoCount', 0)),
            'viewCount': int(statistics.get('viewCount', 0)),
            'uploadsPlaylistId': channel.get('contentDetails', {}).get('relatedPlaylists', {}).get('uploads', '')
        }

    def fetch_recent_uploads(self, playlist_id, max_results=50, lookback_months=3, now=None):
        """
        Fetch the newest uploads and keep those published inside the lookback window.

        Only the first page of the uploads playlist is read (up to 50 items),
        which always holds the most recent uploads.
        """
        request = self.youtube.playlistItems().list(
            part='snippet',
            playlistId=playlist_id,
            maxResults=max_results
        )
        response = self._execute(request)

        items = response.get('items') or []
        if not items:
            raise ChannelNotFoundError("No videos found on this channel.")

        now = now or datetime.now(timezone.utc)
        cutoff = now - relativedelta(months=lookback_months)

        recent = []
        for item in items:
            snippet = item.get('snippet', {})
            try:
                published = dateparser.isoparse(snippet.get('publishedAt', ''))
            except (TypeError, ValueError):
                continue
            if published.tzinfo is None:
                published = published.replace(tzinfo=timezone.utc)
            if published >= cutoff:
                recent.append(item)

        if not recent:
            raise ChannelNotFoundError(f"No videos found in the last {lookback_months} months.")

        self.log(f"   Found {len(recent)} uploads in the last {lookback_months} months")
        return recent

    def fetch_video_details(self, video_ids):
        """Fetch snippet and statistics for videos, 50 per request, in API shape."""
        videos = []
        for i in range(0, len(video_ids), VIDEO_BATCH_SIZE):
            batch_ids = video_ids[i:i + VIDEO_BATCH_SIZE]

            request = self.youtube.videos().list(
                part='snippet,statistics',
                id=','.join(batch_ids)
            )
            response = self._execute(request)
            videos.extend(response.get('items', []))

        return videos

    def fetch_recent_videos(self, raw_input, max_results=50, lookback_months=3, now=None):
        """
        Run the full chain for one user query.

        Steps:
        1. Classify the input (URL, @handle or channel ID)
        2. Resolve handles/usernames to a channel ID
        3. Read the uploads playlist from the channel details
        4. Keep uploads from the lookback window
        5. Fetch statistics for those videos

        Returns (channel_info, videos). The first failure aborts the chain.
        """
        identifier = resolve_channel_identifier(raw_input)
        if identifier is None:
            raise InvalidIdentifierError(
                "Invalid YouTube URL or channel identifier. "
                "Please enter a valid channel URL, @handle, or channel ID."
            )

        self.log(f"🔍 Resolving {identifier.kind}: {identifier.value}")
        channel_id = self.resolve_channel_id(identifier)
        self.log(f"   Channel ID: {channel_id}")

        channel_info = self.fetch_channel_info(channel_id)
        uploads_playlist_id = channel_info['uploadsPlaylistId']
        if not uploads_playlist_id:
            raise ChannelNotFoundError("Could not find uploads playlist for this channel.")

        self.log(f"📹 Fetching recent uploads for {channel_info['title']}...")
        uploads = self.fetch_recent_uploads(uploads_playlist_id, max_results, lookback_months, now=now)

        video_ids = [item['snippet']['resourceId']['videoId'] for item in uploads]
        videos = self.fetch_video_details(video_ids)
        self.log(f"✅ Fetched statistics for {len(videos)} videos")

        return channel_info, videos

    def save_data(self, channel_info, videos, output_dir):
        """Save fetched data to JSON file"""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        data = {
            'channel': channel_info,
            'videos': videos,
            'metadata': {
                'fetchedAt': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
                'videoCount': len(videos),
                'quotaUsed': self.quota_used
            }
        }

        output_file = output_path / 'raw_data.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return str(output_file)


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing channel URL")
        print("\nUsage:")
        print("  python3 -m tools.youtube_fetch_channel_data \"CHANNEL_URL\"")
        print("\nExample:")
        print("  python3 -m tools.youtube_fetch_channel_data \"https://youtube.com/@mkbhd\"")
        sys.exit(1)

    channel_input = sys.argv[1].strip()

    api_key = os.getenv('YOUTUBE_API_KEY')
    max_results = int(os.getenv('MAX_RESULTS', 50))
    lookback_months = int(os.getenv('LOOKBACK_MONTHS', 3))
    output_folder = os.getenv('OUTPUT_FOLDER', '.tmp/youtube_seo')

    if not api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file")
        sys.exit(1)

    try:
        print("🚀 YouTube Recent Uploads Fetcher")
        print("=" * 50)
        print(f"Channel: {channel_input}")
        print(f"Lookback: {lookback_months} months (max {max_results} uploads)")
        print()

        fetcher = YouTubeChannelFetcher(api_key)
        channel_info, videos = fetcher.fetch_recent_videos(channel_input, max_results, lookback_months)
        print()

        output_dir = f"{output_folder}/{channel_info['id']}"
        output_file = fetcher.save_data(channel_info, videos, output_dir)

        print("=" * 50)
        print("✅ SUCCESS!")
        print(f"📁 Data saved to: {output_file}")
        print(f"📊 Videos fetched: {len(videos)}")
        print(f"💰 API quota used: ~{fetcher.quota_used} units")
        print()
        print("Next step:")
        print(f"  python3 -m tools.youtube_analyze_videos {output_file}")

    except InvalidIdentifierError as e:
        print(f"❌ Validation Error: {e}")
        sys.exit(1)
    except ChannelLookupError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
