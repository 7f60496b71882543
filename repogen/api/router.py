from fastapi import APIRouter
from repogen.api.v1 import descriptor_router, table_router, config_router

apiRouter = APIRouter()

apiRouter.include_router(config_router.router, tags=["Configuration"])
apiRouter.include_router(descriptor_router.router)
apiRouter.include_router(table_router.router)
