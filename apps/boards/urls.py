from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'boards'

router = DefaultRouter()
router.register(r'', views.BoardViewSet, basename='board')

urlpatterns = [
    # GET    /api/boards/                          - List user's boards
    # POST   /api/boards/                          - Create board
    # GET    /api/boards/{id}/                     - Get board (read)
    # PATCH  /api/boards/{id}/                     - Update title/description (write)
    # DELETE /api/boards/{id}/                     - Delete board and contents (owner)
    # POST   /api/boards/{id}/archive/             - Archive (owner/admin)
    # POST   /api/boards/{id}/unarchive/           - Unarchive (owner/admin)
    # POST   /api/boards/{id}/star/                - Star (owner/admin/editor)
    # POST   /api/boards/{id}/unstar/              - Unstar (owner/admin/editor)
    # GET    /api/boards/{id}/members/             - List active members
    # POST   /api/boards/{id}/members/             - Add member (owner/admin)
    # PATCH  /api/boards/{id}/members/{user_id}/   - Change member role (owner/admin)
    # DELETE /api/boards/{id}/members/{user_id}/   - Remove member (owner/admin)
    path('', include(router.urls)),
]
