from app.sentiment_analysis.views import router
