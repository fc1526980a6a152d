PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def provider_form(**overrides):
    form = {
        "serviceName": "Minneriya Jeep Tours",
        "fullName": "Sunil Fernando",
        "email": "sunil@gmail.com",
        "contact": "0712345678",
        "category": "Jeep Safari",
        "location": "Habarana",
        "price": "25",
        "description": "Elephant gathering safari",
        "password": "secret123",
    }
    form.update(overrides)
    return form


def image_files(photos=1):
    files = [("profilePicture", ("me.png", PNG_BYTES, "image/png"))]
    for i in range(photos):
        files.append(("photos", (f"photo{i}.jpg", JPEG_BYTES, "image/jpeg")))
    return files
