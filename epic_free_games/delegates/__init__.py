# epic_free_games/delegates/__init__.py

# This file makes the delegate classes directly available from the 'delegates' package.
# Instead of: from epic_free_games.delegates.feed_fetcher_delegate import FeedFetcherDelegate
# We can now use: from epic_free_games.delegates import FeedFetcherDelegate

from .feed_fetcher_delegate import FeedFetcherDelegate
