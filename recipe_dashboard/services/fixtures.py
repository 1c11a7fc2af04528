"""
Built-in example runs served when no run store is configured.
"""

FIXTURE_RUNS = [
    {
        'id': 1,
        'phone_number': '+1234567890',
        'content_id': 'content_123',
        'platform': 'Instagram',
        'url': 'https://instagram.com/recipe/123',
        'status': 'completed',
        'recipe_id': 456,
        'error_message': None,
        'created_at': '2024-01-15T10:30:00Z',
        'user_id': 'user_789',
        'run_id': 'run_abc123',
        'good_recipe': True,
        'feedback': 'Great recipe extraction!',
        'sender': None,
    },
    {
        'id': 2,
        'phone_number': '+1987654321',
        'content_id': 'content_456',
        'platform': 'TikTok',
        'url': 'https://tiktok.com/@chef/video/789',
        'status': 'failed',
        'recipe_id': None,
        'error_message': 'Unable to parse recipe content',
        'created_at': '2024-01-15T09:15:00Z',
        'user_id': 'user_456',
        'run_id': 'run_def456',
        'good_recipe': False,
        'feedback': None,
        'sender': None,
    },
    {
        'id': 3,
        'phone_number': '+1555123456',
        'content_id': 'content_789',
        'platform': 'YouTube',
        'url': 'https://youtube.com/watch?v=recipe123',
        'status': 'processing',
        'recipe_id': None,
        'error_message': None,
        'created_at': '2024-01-15T11:45:00Z',
        'user_id': 'user_123',
        'run_id': 'run_ghi789',
        'good_recipe': None,
        'feedback': None,
        'sender': None,
    },
    {
        'id': 4,
        'phone_number': '+1444555666',
        'content_id': 'content_101',
        'platform': 'Instagram',
        'url': 'https://instagram.com/recipe/456',
        'status': 'completed',
        'recipe_id': 789,
        'error_message': None,
        'created_at': '2024-01-14T15:20:00Z',
        'user_id': 'user_101',
        'run_id': 'run_xyz789',
        'good_recipe': True,
        'feedback': 'Perfect extraction',
        'sender': None,
    },
    {
        'id': 5,
        'phone_number': '+1777888999',
        'content_id': 'content_202',
        'platform': 'TikTok',
        'url': 'https://tiktok.com/@foodie/video/101',
        'status': 'pending',
        'recipe_id': None,
        'error_message': None,
        'created_at': '2024-01-14T12:10:00Z',
        'user_id': 'user_202',
        'run_id': 'run_pending1',
        'good_recipe': None,
        'feedback': None,
        'sender': None,
    },
]
