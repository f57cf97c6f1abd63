from schoolhub.core.security import Principal, create_access_token


def school_payload(email="info@greenfield.ac.ke", name="Greenfield Academy"):
    return {
        "name": name,
        "address": "12 Moi Avenue, Nairobi",
        "phone": "+254722000000",
        "email": email,
        "principal_name": "Jane Wanjiru",
        "principal_email": "principal@" + email.split("@")[1],
        "subscription": {"tier": "standard", "features": {"results": True}},
    }


def bearer(role, school_id=None, user_id="user-1", name="Test User"):
    token = create_access_token(Principal(
        id=user_id,
        role=role,
        school_id=school_id,
        email=f"{user_id}@example.com",
        name=name,
    ))
    return {"Authorization": f"Bearer {token}"}
