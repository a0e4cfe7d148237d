"""Starter descriptions that show users how much detail a good request carries."""

EXAMPLE_PROMPTS: dict[str, str] = {
    "blog": (
        "I need a modern blog platform with users, posts, and comments. Users can "
        "write multiple posts with rich content (title, body, excerpt). Each post can "
        "have many threaded comments. Include post categories and tagging. Users have "
        "profiles with bio and avatar. Support draft/published post statuses and "
        "SEO-friendly URLs. Optimize for read-heavy workloads."
    ),
    "ecommerce": (
        "Create an e-commerce platform database. Products with variants (size, "
        "color), categories and subcategories, inventory tracking with low-stock "
        "alerts. Customer accounts with multiple shipping addresses. Shopping cart "
        "and wishlist. Orders with status tracking (pending, shipped, delivered). "
        "Payments with transaction history, product reviews and ratings, and a "
        "coupon system. Optimize for high transaction volume."
    ),
    "social": (
        "Design a social media platform. User profiles with followers/following "
        "relationships. Posts with text, images and videos. Likes, comments and "
        "shares. Direct messaging between users, notifications for interactions, "
        "hashtags and mentions, privacy settings and content moderation. Optimize "
        "for real-time updates and high engagement."
    ),
    "saas": (
        "Build a multi-tenant SaaS database for project management. Organizations "
        "with users and role-based permissions (admin, member, viewer). Projects "
        "with tasks, milestones and deadlines. Time tracking, file attachments and "
        "comments. Subscriptions with plans and billing cycles, usage analytics and "
        "API access logs. Data isolation between organizations."
    ),
    "analytics": (
        "Create a data warehouse for web analytics. Event tracking for page views, "
        "clicks and conversions. Sessions with device and location data. Custom "
        "event properties, cohort analysis, funnel and retention reports, A/B test "
        "tracking and data retention policies. Optimize for analytical queries over "
        "large data volumes."
    ),
    "task_management": (
        "Design a team task management system. Teams with projects and boards. "
        "Tasks with priorities, due dates and assignees, dependencies and subtasks. "
        "Attachments and comments, time tracking, custom fields and labels, "
        "activity feeds and notifications."
    ),
    "marketplace": (
        "Create a marketplace platform. Seller accounts with shop management. "
        "Listings with multiple images and variants. Buyer purchase history, order "
        "fulfillment and shipping tracking. Ratings for buyers and sellers, "
        "payments with escrow, dispute resolution and commission tracking."
    ),
}
