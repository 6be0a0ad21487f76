from urllib.parse import urlencode

ROBLOX_BASE_URL = "https://www.roblox.com"


def build_headshot_url(user_id, size=150):
    query = urlencode({"userId": user_id, "width": size, "height": size, "format": "png"})
    return f"{ROBLOX_BASE_URL}/headshot-thumbnail/image?{query}"


def build_profile_url(user_id):
    return f"{ROBLOX_BASE_URL}/users/{user_id}/profile"


def build_join_link(place_id, job_id, joiner_base_url):
    query = urlencode({"placeId": place_id, "gameInstanceId": job_id})
    return f"{joiner_base_url}?{query}"


def build_join_script(place_id, job_id):
    # jobId entra entre aspas no Lua; escapa para não quebrar o script
    safe_job_id = str(job_id).replace("\\", "\\\\").replace('"', '\\"')
    return (
        f'game:GetService("TeleportService"):TeleportToPlaceInstance('
        f'{place_id}, "{safe_job_id}", game:GetService("Players").LocalPlayer)'
    )
