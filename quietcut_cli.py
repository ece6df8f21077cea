#!/usr/bin/env python3

import argparse
from quietcutlib.core import utils
from quietcutlib.core.project import QuietcutProject

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Find noisy sections in a recording and cut out the dead air."
	)
	parser.add_argument('-i', '--input', dest='input_file', required=True,
		help='input video or audio file')
	parser.add_argument('-o', '--output', dest='output_file',
		help='render the kept sections to this file')
	parser.add_argument('-a', '--audio', dest='audio_file',
		help='analyze this wav file instead of extracting audio')
	parser.add_argument('-c', '--config', dest='config_file',
		help='path to a quietcut config YAML')
	parser.add_argument('-s', '--sections', dest='sections_file',
		help='write the sections report here')
	parser.add_argument('-t', '--threshold', dest='threshold', type=float,
		help='override silence threshold (fraction of peak)')
	parser.add_argument('--attack', dest='attack_frames', type=int,
		help='override attack debounce in frames')
	parser.add_argument('--release', dest='release_frames', type=int,
		help='override release debounce in frames')
	parser.add_argument('--shift', dest='shift_ms', type=int,
		help='override section start shift in milliseconds')
	parser.add_argument('--expand', dest='expand_ms', type=int,
		help='override section padding in milliseconds')
	parser.add_argument('--cache-dir', dest='cache_dir',
		help='directory for temporary files')
	parser.add_argument('-k', '--keep-temp', dest='keep_temp',
		help='keep temporary files', action='store_true')
	parser.add_argument('-K', '--no-keep-temp', dest='keep_temp',
		help='remove temporary files', action='store_false')
	parser.add_argument('-d', '--debug', dest='debug', action='store_true',
		help='write a debug report and plot')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='suppress progress output')
	parser.set_defaults(keep_temp=False)
	args = parser.parse_args()
	return args

#============================================

def main():
	args = parse_args()
	utils.set_quiet_mode(args.quiet)
	overrides = {
		'threshold': args.threshold,
		'attack_frames': args.attack_frames,
		'release_frames': args.release_frames,
		'shift_ms': args.shift_ms,
		'expand_ms': args.expand_ms,
	}
	project = QuietcutProject(args.input_file, output_file=args.output_file,
		audio_file=args.audio_file, config_file=args.config_file,
		overrides=overrides, sections_file=args.sections_file,
		keep_temp=args.keep_temp, cache_dir=args.cache_dir, debug=args.debug)
	project.run()


if __name__ == '__main__':
	main()
