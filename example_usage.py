#!/usr/bin/env python3
"""
Basic usage examples for the Pusher REST client library.

Credentials are read from the environment:
    PUSHER_CLUSTER, PUSHER_KEY, PUSHER_APPID, PUSHER_SECRET
"""

import logging
import sys

from pusher_client import EnvironmentConfig, Pusher, PusherClientError


def main():
    """Run basic usage examples."""

    print("=== Pusher REST Client Basic Usage Examples ===\n")

    # Create Pusher client
    print("1. Creating Pusher client from environment...")
    pusher = Pusher(EnvironmentConfig(), timeout=10)

    try:
        service = pusher.get_service()
        print(f"   Client created for: {service.base_url}")
        print(f"   App id: {service.credentials.app_id}\n")

        # Example 1: Trigger an event on one channel
        print("2. Triggering an event...")
        event = pusher.trigger_event(
            "example-event",
            {"message": "Hello from Python!"},
            "presence-example",
            info=["user_count", "subscription_count"]
        )
        if event is None:
            print("   ✓ Event sent, no channel info returned")
        else:
            for name, summary in event.channels.items():
                print(f"   ✓ {name}: users={summary.user_count} subscriptions={summary.subscription_count}")
        print()

        # Example 2: Batch events
        print("3. Triggering a batch of events...")
        batch = pusher.batch_events([
            {"channel": "example-a", "name": "example-event", "data": '{"n":1}'},
            {"channel": "example-b", "name": "example-event", "data": '{"n":2}', "info": "subscription_count"},
        ])
        if batch is not None:
            for position, summary in enumerate(batch.batch):
                print(f"   ✓ #{position}: subscriptions={summary.subscription_count}")
        print()

        # Example 3: Channel info
        print("4. Fetching channel info...")
        channel = pusher.channel_info("presence-example", ["user_count", "subscription_count"])
        if channel is not None:
            print(f"   Occupied: {channel.occupied}")
            print(f"   Users: {channel.user_count}")
            print(f"   Subscriptions: {channel.subscription_count}")
        print()

        # Example 4: Channels info
        print("5. Listing presence channels...")
        channels = pusher.channels_info("presence-", ["user_count"])
        if channels is not None:
            for name, summary in channels.channels.items():
                print(f"   {name}: {summary.user_count} users")
        print()

        # Example 5: Users
        print("6. Fetching users of a presence channel...")
        users = pusher.get_users("presence-example")
        if users is not None:
            print(f"   User ids: {', '.join(user.id for user in users.users) or 'none'}")
        print()

        print("=== All Examples Completed Successfully! ===")

    except PusherClientError as e:
        print(f"Pusher Client Error: {e}")
        sys.exit(1)
    finally:
        pusher.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main()
