import os
import re
import shutil
import subprocess
import sys

from dotenv import load_dotenv

load_dotenv()


def run_step(args, step_name):
    print(f"\n🚀 Running Step: {step_name}...")
    command = [sys.executable, "-m", *args]
    try:
        process = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)

        # Step 1 output carries the channel id
        full_output = ""
        for line in process.stdout:
            print(line, end="")
            full_output += line

        process.wait()

        if process.returncode != 0:
            print(f"❌ Error in {step_name}")
            return False, full_output

        return True, full_output
    except OSError as e:
        print(f"❌ Exception in {step_name}: {e}")
        return False, str(e)


def copy_artifact(source, target, label):
    if not os.path.exists(source):
        return
    try:
        shutil.copy(source, target)
        print(f"✨ {label} copied to: {target}")
    except OSError as e:
        print(f"⚠️ Could not copy {label} to reports/ archive: {e}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py \"CHANNEL\" [--name NAME] [--email EMAIL]")
        sys.exit(1)

    channel_input = sys.argv[1]
    extra_pdf_args = sys.argv[2:]
    output_folder = os.getenv("OUTPUT_FOLDER", ".tmp/youtube_seo")

    os.makedirs("reports", exist_ok=True)

    # Step 1: Fetch recent uploads
    success, output = run_step(["tools.youtube_fetch_channel_data", channel_input], "Fetching Channel Data")
    if not success:
        sys.exit(1)

    match = re.search(r"Channel ID: ([A-Za-z0-9_-]+)", output)
    if not match:
        print("❌ Could not determine Channel ID from output.")
        sys.exit(1)

    channel_id = match.group(1).strip()
    print(f"✅ Identified Channel ID: {channel_id}")

    channel_dir = os.path.join(output_folder, channel_id)
    raw_data_path = os.path.join(channel_dir, "raw_data.json")
    analysis_path = os.path.join(channel_dir, "analysis.json")
    excel_path = os.path.join(channel_dir, "seo_report.xlsx")
    pdf_path = os.path.join(channel_dir, "seo_report.pdf")

    # Step 2: Score and rank
    success, _ = run_step(["tools.youtube_analyze_videos", raw_data_path], "Analyzing Videos")
    if not success:
        sys.exit(1)

    # Step 3: Excel workbook
    success, _ = run_step(["tools.export_to_excel", analysis_path, excel_path], "Exporting to Excel")
    if not success:
        print("⚠️ Excel export failed, proceeding to PDF report.")

    # Step 4: PDF report
    success, _ = run_step(
        ["tools.generate_pdf_report", analysis_path, "--output", pdf_path, *extra_pdf_args],
        "Generating PDF Report",
    )
    if not success:
        print("⚠️ PDF report failed.")

    print()
    copy_artifact(pdf_path, f"reports/{channel_id}_seo_report.pdf", "Final PDF report")
    copy_artifact(excel_path, f"reports/{channel_id}_seo_report.xlsx", "Final Excel workbook")

    print("\n✅ SEO Pipeline Complete!")


if __name__ == "__main__":
    main()
