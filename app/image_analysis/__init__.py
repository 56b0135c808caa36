from app.image_analysis.views import router
