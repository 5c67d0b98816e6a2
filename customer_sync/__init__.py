"""Forward Commercetools customer notifications to Segment's Identify API."""
