from django.urls import path
from . import views

urlpatterns = [
    path('<str:portfolio_id>/upload-section-images', views.upload_section_images, name='upload_section_images'),
    path('<str:portfolio_id>/update-image-details', views.update_image_details, name='update_image_details'),
    path('<str:portfolio_id>/delete-image/<path:public_id>', views.delete_image, name='delete_image'),
]
