#!/usr/bin/env python3
"""
Quick verification script to ensure transcript-resolver is working correctly.
Run with: python verify_setup.py
"""

import sys
from pathlib import Path

# Add src to path so we can import without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

def test_basic_imports():
    """Test that all core modules can be imported."""
    print("Testing imports...")
    try:
        from transcript_resolver.resolver import TranscriptResolver
        from transcript_resolver.extraction import extract_caption_tracks
        from transcript_resolver.timedtext import parse_timed_text
        from transcript_resolver.config import Config
        print("✅ All core modules imported successfully")
        return True
    except Exception as e:
        print(f"❌ Import failed: {e}")
        return False

def test_caption_extraction():
    """Test caption track discovery on a canned watch page."""
    print("\nTesting caption extraction...")
    try:
        from transcript_resolver.extraction import extract_caption_tracks, select_track

        html = (
            '{"captionTracks":[{\\x22baseUrl\\x22:\\x22https://x/timedtext?lang=en\\x22,'
            '\\x22languageCode\\x22:\\x22en\\x22}],"audioTracks":[]}'
        )
        tracks = extract_caption_tracks(html)
        if tracks and select_track(tracks).language_code == "en":
            print(f"✅ Found {len(tracks)} track(s)")
            return True

        print(f"❌ Unexpected tracks: {tracks}")
        return False
    except Exception as e:
        print(f"❌ Caption extraction failed: {e}")
        return False

def test_hosted_configuration():
    """Report whether the hosted transcript API is configured."""
    print("\nChecking hosted transcript API...")
    from transcript_resolver.config import config

    if config.SUPADATA_API_KEY:
        print("✅ SUPADATA_API_KEY set, hosted API will be tried first")
    else:
        print("⚠️  SUPADATA_API_KEY not set, only the direct page strategy will run")
    return True

def main():
    """Run all verification tests."""
    print("🧪 Verifying transcript-resolver setup...\n")

    tests = [test_basic_imports, test_caption_extraction, test_hosted_configuration]
    passed = 0

    for test in tests:
        if test():
            passed += 1
        else:
            break

    print(f"\n📊 Verification: {passed}/{len(tests)} tests passed")

    if passed == len(tests):
        print("🎉 transcript-resolver is ready to use!")
        print("\nNext steps:")
        print("1. Run tests: pytest")
        print("2. Fetch a transcript: transcript-resolver fetch <url>")
        return 0
    else:
        print("❌ Setup verification failed. Check the output above.")
        return 1

if __name__ == "__main__":
    sys.exit(main())
