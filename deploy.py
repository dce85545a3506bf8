# deploy.py
import modal

# Define the base image (pinned interpreter; pyproject.toml only sets the >=3.12 floor)
image = (
    modal.Image.debian_slim(python_version="3.13")
    .pip_install_from_pyproject("pyproject.toml")
    .add_local_python_source("main")
    .add_local_python_source("routers")
    .add_local_python_source("utils")
    .add_local_python_source("exceptions")
)

# Define the Modal App
app = modal.App(
    name="policy-case-study-explorer",
    image=image,
    secrets=[modal.Secret.from_name("case-study-api-secret")],
)


# Define the ASGI app function
@app.function()
@modal.asgi_app()
def fastapi_app():
    from main import app as web_app

    return web_app
