from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from app.services.s3 import s3_service
from app.services.auth import check_permission
from app.routers.auth import get_admin_user
from app.models.admin_user import AdminUser

router = APIRouter()

async def upload_image(file: UploadFile, kind: str, admin_user: AdminUser) -> dict:
    if not check_permission(admin_user, "uploads.create"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    # Validate file type
    if not file.content_type or not file.content_type.startswith('image/'):
        raise HTTPException(status_code=400, detail="File harus berupa gambar")

    content = await file.read()

    s3_key = s3_service.upload_file(
        file_content=content,
        file_name=file.filename or "",
        kind=kind,
        content_type=file.content_type
    )
    if not s3_key:
        raise HTTPException(status_code=500, detail="Gagal mengunggah gambar")

    return {
        "s3_key": s3_key,
        "url": s3_service.get_public_url(s3_key),
        "message": "Gambar berhasil diunggah"
    }

@router.post("/blog-image")
async def upload_blog_image(
    file: UploadFile = File(...),
    admin_user: AdminUser = Depends(get_admin_user)
):
    """Upload a blog cover image (ideal size 1200x627)"""
    return await upload_image(file, "blog", admin_user)

@router.post("/brand-logo")
async def upload_brand_logo(
    file: UploadFile = File(...),
    admin_user: AdminUser = Depends(get_admin_user)
):
    return await upload_image(file, "logo", admin_user)

@router.post("/testimonial-avatar")
async def upload_testimonial_avatar(
    file: UploadFile = File(...),
    admin_user: AdminUser = Depends(get_admin_user)
):
    return await upload_image(file, "avatar", admin_user)

@router.delete("/image/{path:path}")
def delete_image(
    path: str,
    admin_user: AdminUser = Depends(get_admin_user)
):
    if not check_permission(admin_user, "uploads.delete"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    if not s3_service.is_site_image(path):
        raise HTTPException(status_code=400, detail="Path gambar tidak valid")

    if not s3_service.delete_file(path):
        raise HTTPException(status_code=500, detail="Gagal menghapus gambar")

    return {"message": "Gambar berhasil dihapus"}
