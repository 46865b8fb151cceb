import streamlit as st
import time
import traceback
import pandas as pd
import plotly.graph_objects as go

from compressor import ALGORITHMS, ALGORITHM_NAMES, compress_with_result, decompress
from config import load_config
from errors import CompressionError
from huffman import build_frequency_table, build_huffman_tree, get_codes
from logging_utils import setup_logging
from lzw import LZW_decode_codes, SEED_SIZE, parse_codes
from pdf_utils import (
    TextExtractionError,
    compressed_filename,
    extract_text_from_upload,
    save_compressed_file,
    tree_filename,
)
from text_metrics import byte_size, calculate_entropy, packed_bit_size

config = load_config()
logger = setup_logging("textcomp", config.log_dir, config.log_level)

# Page config
st.set_page_config(
    page_title="Text Compression Tool",
    layout="wide"
)

# Title
st.title("Text Compression Tool")
st.markdown("Compress and decompress text files using RLE, Huffman and LZW")
st.markdown("---")

# Initialize session state
for key in ['input_data', 'file_name', 'huffman_tree', 'last_run', 'decompressed_text']:
    if key not in st.session_state:
        st.session_state[key] = None

# Sidebar for controls
with st.sidebar:
    st.header("Settings")

    operation_mode = st.radio(
        "Operation:",
        ["Compress", "Decompress"]
    )

    algorithm_choices = [ALGORITHM_NAMES[a] for a in ALGORITHMS]
    if operation_mode == "Compress":
        input_type = st.radio(
            "Input Type:",
            ["Upload File", "Enter Text"]
        )
        algorithm_choices.append("Compare All")

    algorithm_label = st.selectbox(
        "Algorithm:",
        algorithm_choices,
        index=ALGORITHMS.index(config.default_algorithm)
    )

# None stands for "Compare All"
algorithm = next((code for code, name in ALGORITHM_NAMES.items() if name == algorithm_label), None)


# Helper functions
def show_error(prefix, e):
    """Expected failures get a message; anything else also gets the traceback."""
    if isinstance(e, (CompressionError, TextExtractionError)):
        logger.warning("%s: %s", prefix, e)
        st.error(f"{prefix}: {e}")
    else:
        logger.exception(prefix)
        st.error(f"{prefix}: {str(e)}")
        with st.expander("Error Details"):
            st.code(traceback.format_exc())


def show_algorithm_info(algorithm, input_data):
    with st.expander(" Algorithm Information"):
        if algorithm == "RLE":
            st.markdown("""
            **How RLE Works:**
            - Scans text for consecutive repeated characters
            - Replaces each run with [count]character, the count omitted when it is 1
            - Example: "AAABBC" becomes "3A2BC"
            - Literal digits are escaped with a backslash so they are not read as counts

            **Best for:** Text with long repeated sequences
            **Time Complexity:** O(n)
            """)

            # Show RLE example
            if len(input_data) > 10:
                sample = input_data[:10]
                runs = []
                i = 0
                while i < len(sample):
                    count = 1
                    while i + count < len(sample) and sample[i] == sample[i + count]:
                        count += 1
                    runs.append(f"'{sample[i]}' × {count}")
                    i += count
                st.write(f"**Example (first 10 chars):** {' → '.join(runs)}")

        elif algorithm == "Huffman":
            st.markdown("""
            **How Huffman Coding Works:**
            - Creates optimal prefix codes based on character frequencies
            - Frequent characters get shorter codes
            - Builds a binary tree that must travel with the bit-string to decode it

            **Best for:** Text with varied character frequencies
            **Time Complexity:** O(n log n)
            """)

        elif algorithm == "LZW":
            st.markdown("""
            **How LZW Works:**
            - Dictionary-based compression, seeded with the 256 Latin-1 characters
            - Builds a dictionary of phrases dynamically, new codes start at 256
            - Output is a comma separated list of codes

            **Best for:** Text with repeated phrases
            **Used in:** GIF, TIFF, Unix compress
            **Time Complexity:** O(n)
            """)


def show_huffman_details(input_data, bits, single_char):
    with st.expander("Huffman Codes (Top 10)"):
        freq = build_frequency_table(input_data)
        if single_char:
            st.info(
                f"Only one distinct character ({single_char!r}). The payload is a run of "
                f"{len(bits):,} zeros that records the length; it is not entropy-coded output."
            )
            return

        codes = get_codes(build_huffman_tree(freq))
        st.write(f"**Bit-string length:** {len(bits):,} bits ({packed_bit_size(bits):,} bytes once packed)")

        top_chars = sorted(freq.items(), key=lambda x: x[1], reverse=True)[:10]
        table_data = []
        for char, count in top_chars:
            code = codes.get(char, "N/A")
            table_data.append({
                "Character": repr(char)[1:-1],
                "Frequency": count,
                "Code": code,
                "Length": len(code)
            })

        df = pd.DataFrame(table_data)
        st.table(df)


def show_lzw_details(compressed):
    with st.expander("🔍 LZW Details"):
        codes = parse_codes(compressed) if compressed else []
        _, lzw_dict = LZW_decode_codes(codes)
        literals = sum(1 for code in codes if code < 0)

        st.write(f"**Number of codes:** {len(codes)}")
        st.write(f"**Dictionary size:** {len(lzw_dict)} entries")
        if literals:
            st.write(f"**Literal codes (characters above U+00FF):** {literals}")

        if codes:
            st.write(f"**First 10 codes:** {codes[:10]}")

            # Show some learned phrases
            table_data = []
            for code in range(SEED_SIZE, min(len(lzw_dict), SEED_SIZE + 10)):
                table_data.append({
                    "Code": code,
                    "String": repr(lzw_dict[code])[1:-1][:30]
                })

            if table_data:
                st.write("**Dictionary entries (sample):**")
                df = pd.DataFrame(table_data)
                st.table(df)


def show_compression_result(run):
    result = run['result']
    artifact = run['artifact']
    input_data = run['input_data']
    file_name = run['file_name']
    algorithm = result.algorithm

    st.subheader("Compression Results")

    # Main metrics
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Original Size", f"{result.original_size:,} B")
    with col2:
        st.metric("Compressed Size", f"{result.compressed_size:,} B")
    with col3:
        st.metric("Space Saved", f"{result.compression_ratio:.1f}%")
    with col4:
        st.metric("Compression Time", f"{run['time']:.3f} s")

    # Additional metrics
    col5, col6 = st.columns(2)
    with col5:
        st.metric("Compression Ratio", f"{result.size_ratio:.2f}:1")
    with col6:
        entropy = calculate_entropy(input_data)
        st.metric("Entropy", f"{entropy:.3f} bits/char")

    # Visualization
    st.subheader("Visualization")

    # Size comparison chart
    fig1 = go.Figure(data=[
        go.Bar(name='Original', x=['Size'], y=[result.original_size], marker_color='blue'),
        go.Bar(name='Compressed', x=['Size'], y=[result.compressed_size], marker_color='green')
    ])
    fig1.update_layout(
        title="Size Comparison",
        yaxis_title="Size (bytes)",
        height=300
    )
    st.plotly_chart(fig1, use_container_width=True)

    # Savings gauge
    savings = max(result.compression_ratio, 0)
    fig2 = go.Figure(data=[
        go.Indicator(
            mode="gauge+number",
            value=savings,
            title="Space Saved",
            domain={'x': [0, 1], 'y': [0, 1]},
            gauge={
                'axis': {'range': [0, 100]},
                'bar': {'color': "green" if savings > 50 else "orange" if savings > 20 else "red"},
                'steps': [
                    {'range': [0, 20], 'color': "lightcoral"},
                    {'range': [20, 50], 'color': "lightyellow"},
                    {'range': [50, 100], 'color': "lightgreen"}]
            }
        )
    ])
    fig2.update_layout(height=300)
    st.plotly_chart(fig2, use_container_width=True)

    # Check decompression
    st.subheader(" Decompression Test")
    decompressed = run['decompressed']
    if decompressed == input_data:
        st.success("**Decompression Successful!** Original and decompressed text match exactly.")
    elif len(decompressed) != len(input_data):
        st.error(f" **Length mismatch:** Original: {len(input_data)} chars, Decompressed: {len(decompressed)} chars")
    else:
        mismatches = [i for i, (a, b) in enumerate(zip(input_data, decompressed)) if a != b]
        for i in mismatches[:3]:
            st.write(f"Mismatch at position {i}: Original {input_data[i]!r} vs Decompressed {decompressed[i]!r}")
        st.error(f"**Decompression Failed!** {len(mismatches)} mismatches found")

    # Compressed output
    st.subheader("Compressed Data")
    preview = artifact.data[:config.preview_chars]
    st.code(preview + ("…" if len(artifact.data) > config.preview_chars else ""), language=None)
    if artifact.tree:
        with st.expander("Huffman Tree (needed for decompression)"):
            st.code(artifact.tree, language="json")

    # Download section
    st.subheader("Download")
    data_name = compressed_filename(file_name, algorithm)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            "📥 Download Compressed File",
            data=artifact.data,
            file_name=data_name,
            mime="text/plain"
        )
    with col2:
        if artifact.tree:
            st.download_button(
                "📥 Download Huffman Tree",
                data=artifact.tree,
                file_name=tree_filename(file_name),
                mime="application/json"
            )
    with col3:
        if st.button("💾 Save to output directory"):
            try:
                path = save_compressed_file(artifact.data, data_name, config.get_output_path())
                if artifact.tree:
                    save_compressed_file(artifact.tree, tree_filename(file_name), config.get_output_path())
                st.success(f"Saved to {path}")
            except OSError as e:
                show_error("Could not save file", e)

    # Algorithm-specific details
    if algorithm == "Huffman":
        show_huffman_details(input_data, artifact.data, run['single_char'])
    elif algorithm == "LZW":
        show_lzw_details(artifact.data)


def run_compression(algorithm, input_data, file_name):
    start_time = time.time()
    artifact, result = compress_with_result(algorithm, input_data)
    compression_time = time.time() - start_time

    decompressed = decompress(algorithm, artifact.data, artifact.tree)

    if artifact.tree:
        # Keep the tree for decompress mode
        st.session_state.huffman_tree = artifact.tree

    single_char = None
    if algorithm == "Huffman" and len(build_frequency_table(input_data)) == 1:
        single_char = input_data[0]

    st.session_state.last_run = {
        'artifact': artifact,
        'result': result,
        'input_data': input_data,
        'file_name': file_name,
        'time': compression_time,
        'decompressed': decompressed,
        'single_char': single_char,
    }


def compare_all(input_data):
    st.header("Algorithm Comparison")

    if not st.button("Compare All Algorithms", type="primary"):
        return

    results = []

    progress_bar = st.progress(0)
    status_text = st.empty()

    for idx, algo_code in enumerate(ALGORITHMS):
        algo_name = ALGORITHM_NAMES[algo_code]
        status_text.text(f"Testing {algo_name}...")
        progress_bar.progress((idx + 1) / len(ALGORITHMS))

        try:
            start_time = time.time()
            artifact, result = compress_with_result(algo_code, input_data)
            comp_time = time.time() - start_time

            row = {
                "Algorithm": algo_name,
                "Time (s)": round(comp_time, 3),
                "Size (bytes)": result.compressed_size,
                "Saved (%)": round(result.compression_ratio, 1),
                "Ratio": round(result.size_ratio, 2)
            }
            if artifact.tree:
                row["Packed size (bytes)"] = packed_bit_size(artifact.data) + byte_size(artifact.tree)
            results.append(row)

        except CompressionError as e:
            logger.warning("%s failed: %s", algo_name, e)
            st.warning(f"{algo_name} failed: {str(e)}")

    progress_bar.empty()
    status_text.text("Comparison complete!")

    if not results:
        return

    df = pd.DataFrame(results)

    # Display table
    st.subheader("Comparison Results")
    st.dataframe(df, use_container_width=True)

    # Size comparison chart
    st.subheader("Size Comparison")
    fig1 = go.Figure(data=[
        go.Bar(
            x=df["Algorithm"],
            y=df["Size (bytes)"],
            text=df["Size (bytes)"],
            textposition='auto',
            marker_color=['blue', 'green', 'orange']
        )
    ])
    fig1.update_layout(
        title="Compressed Size Comparison (lower is better)",
        xaxis_title="Algorithm",
        yaxis_title="Size (bytes)",
        height=400
    )
    st.plotly_chart(fig1, use_container_width=True)

    # Time comparison chart
    st.subheader("Time Comparison")
    fig2 = go.Figure(data=[
        go.Bar(
            x=df["Algorithm"],
            y=df["Time (s)"],
            text=df["Time (s)"],
            textposition='auto',
            marker_color=['blue', 'green', 'orange']
        )
    ])
    fig2.update_layout(
        title="Compression Time Comparison (lower is better)",
        xaxis_title="Algorithm",
        yaxis_title="Time (seconds)",
        height=400
    )
    st.plotly_chart(fig2, use_container_width=True)

    # Find best algorithms
    best_size = df.loc[df["Size (bytes)"].idxmin()]
    best_time = df.loc[df["Time (s)"].idxmin()]

    col1, col2 = st.columns(2)
    with col1:
        st.info(f"**Best Size:** {best_size['Algorithm']}\n{best_size['Size (bytes)']:,} bytes")
    with col2:
        st.info(f"**Best Time:** {best_time['Algorithm']}\n{best_time['Time (s)']} seconds")

    # Huffman sizes are 0/1 characters here; packed output is 8x smaller
    if "Packed size (bytes)" in df.columns:
        st.caption("Huffman output is shown as a 0/1 string; the packed size column counts it as real bits plus the tree.")


def compress_page():
    st.header("Input Data")

    if input_type == "Upload File":
        uploaded_file = st.file_uploader(
            "Upload a PDF or text file:",
            type=config.upload_types
        )

        if uploaded_file:
            file_bytes = uploaded_file.getvalue()
            file_name = uploaded_file.name
            if st.session_state.file_name != file_name or st.session_state.input_data is None:
                try:
                    with st.spinner("Extracting text..."):
                        st.session_state.input_data = extract_text_from_upload(file_bytes, file_name)
                    st.session_state.file_name = file_name
                    st.session_state.last_run = None
                except TextExtractionError as e:
                    st.session_state.input_data = None
                    show_error("Could not read file", e)
                    return

            text_data = st.session_state.input_data

            # Display file info
            col1, col2, col3, col4 = st.columns(4)
            with col1:
                st.metric("File Name", file_name)
            with col2:
                st.metric("File Size", f"{len(file_bytes):,} bytes")
            with col3:
                st.metric("Characters", f"{len(text_data):,}")
            with col4:
                entropy = calculate_entropy(text_data)
                st.metric("Entropy", f"{entropy:.3f} bits/char")

            with st.expander(f"Text Preview (First {config.preview_chars} characters)"):
                st.text(text_data[:config.preview_chars])
        else:
            st.session_state.input_data = None
            st.session_state.file_name = None

    else:  # Enter Text
        input_text = st.text_area(
            "Enter text to compress:",
            height=200,
            value=config.sample_text
        )

        if input_text:
            if input_text != st.session_state.input_data:
                st.session_state.last_run = None
            st.session_state.input_data = input_text
            st.session_state.file_name = "text_input.txt"

            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("Characters", f"{len(input_text):,}")
            with col2:
                st.metric("Size", f"{byte_size(input_text):,} bytes")
            with col3:
                entropy = calculate_entropy(input_text)
                st.metric("Entropy", f"{entropy:.3f} bits/char")
        else:
            st.info("Enter some text to compress")
            st.session_state.input_data = None

    input_data = st.session_state.input_data
    if not input_data:
        st.info(" Please upload a file or enter text to begin compression")
        return

    st.markdown("---")

    if algorithm is None:
        compare_all(input_data)
        return

    st.header(f"Algorithm: {algorithm_label}")
    show_algorithm_info(algorithm, input_data)

    if st.button(f"Run {algorithm_label}", type="primary"):
        try:
            run_compression(algorithm, input_data, st.session_state.file_name)
        except Exception as e:
            st.session_state.last_run = None
            show_error("Error during compression", e)

    run = st.session_state.last_run
    if run and run['result'].algorithm == algorithm and run['input_data'] == input_data:
        show_compression_result(run)


def decompress_page():
    st.header(f"Decompress: {algorithm_label}")

    compressed_text = st.text_area(
        "Compressed data:",
        height=200,
        placeholder="3A2BC" if algorithm == "RLE" else "0110..." if algorithm == "Huffman" else "65,66,256,..."
    )

    tree = None
    if algorithm == "Huffman":
        tree = st.text_area(
            "Huffman tree (JSON):",
            value=st.session_state.huffman_tree or "",
            height=150,
            help="Filled in automatically after a Huffman compression in this session"
        )

    if st.button("Decompress", type="primary"):
        st.session_state.decompressed_text = None
        # Whitespace is data for RLE; the other formats never contain it
        data = compressed_text if algorithm == "RLE" else compressed_text.strip()
        if not data:
            st.warning("Please enter compressed text to decompress")
            return
        try:
            st.session_state.decompressed_text = decompress(algorithm, data, tree)
        except Exception as e:
            show_error("Error during decompression", e)
            return

    decompressed = st.session_state.decompressed_text
    if decompressed is not None:
        st.subheader("Decompressed Text")
        col1, col2 = st.columns(2)
        with col1:
            st.metric("Characters", f"{len(decompressed):,}")
        with col2:
            st.metric("Size", f"{byte_size(decompressed):,} bytes")
        st.code(decompressed[:config.preview_chars * 10], language=None)
        st.download_button(
            "📥 Download Decompressed Text",
            data=decompressed,
            file_name=f"decompressed_{algorithm.lower()}.txt",
            mime="text/plain"
        )


# Main area
if operation_mode == "Compress":
    compress_page()
else:
    decompress_page()

# Information section
st.markdown("---")
with st.expander(" About Compression Algorithms"):
    st.markdown("""
    **Algorithm Comparison Guide:**

    | Algorithm | Best For | Speed | Compression | Complexity |
    |-----------|----------|-------|-------------|------------|
    | **RLE** | Repetitive data (AAAAABBB) | Very Fast | Good for repeats | O(n) |
    | **Huffman** | General text files | Moderate | Optimal prefix codes | O(n log n) |
    | **LZW** | Repeated phrases | Moderate | Dictionary-based | O(n) |

    **Key Metrics:**
    - **Compression Ratio:** Original size / Compressed size (higher is better)
    - **Space Saved:** Percentage reduction in size
    - **Entropy:** Theoretical minimum bits per character
    - **Time:** Processing time in seconds

    **Tips:**
    - Huffman output is shown as a string of 0/1 characters and needs its tree to decode
    - Keep the Huffman tree together with the compressed data
    - Test different algorithms to find the best for your data
    """)
# Footer
st.markdown("---")
