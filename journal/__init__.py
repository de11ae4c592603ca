"""Journal: a personal-blog content management API."""
