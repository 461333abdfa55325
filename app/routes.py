from app.api import FeedbackController

ROUTES = [
    FeedbackController,
]
