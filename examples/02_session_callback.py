"""
Callback-style upload using UploadSession directly
"""
import asyncio
from mediaupload import AsyncAPIClient, APIConfig, UploadSession


async def main():
    done = asyncio.Event()
    
    def on_done(error, body, response):
        if error:
            print(f"Failed: {error}")
        else:
            print(f"Finished: {body}")
        done.set()
    
    async with AsyncAPIClient(APIConfig.with_token("token")) as api:
        session = UploadSession("anim.gif", api, max_status_checks=20)
        session.on('progress', lambda p: print(f"{p.uploaded_segments} segments appended"))
        session.upload_with_callback(on_done)
        await done.wait()


if __name__ == "__main__":
    asyncio.run(main())
