"""
Upload media and attach it to a later API call
"""
import asyncio
import os
from mediaupload import MediaClient, MediaUploadException


async def main():
    async with MediaClient(token=os.environ["MEDIAUPLOAD_TOKEN"]) as client:
        
        # Image: appended in 5 MiB segments, no server-side processing
        result = await client.upload("photo.jpg")
        print(f"Uploaded image: {result.media_id}")
        
        # Video with progress for both phases
        def on_progress(progress):
            print(f"Appended: {progress.percentage:.1f}%")
        
        def on_processing(info):
            print(f"Processing: {info.progress_percent}% ({info.state})")
        
        try:
            result = await client.upload(
                "clip.mp4",
                progress_callback=on_progress,
                processing_callback=on_processing
            )
            print(f"Uploaded video: {result.media_id}")
        except MediaUploadException as e:
            print(f"Upload failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
