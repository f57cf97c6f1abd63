import uvicorn
from schoolhub import create_app
from schoolhub.core.config import settings

# Create the FastAPI app using the create_app function
app = create_app()


# Add an endpoint to list all routes (endpoints)
@app.get("/list-endpoints")
def list_endpoints():
    endpoints = []
    for route in app.router.routes:
        endpoints.append({
            "path": route.path,
            "name": route.name,
            "methods": list(getattr(route, "methods", None) or [])
        })
    return {"endpoints": endpoints}


if __name__ == "__main__":
    uvicorn.run("schoolhub.run:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
