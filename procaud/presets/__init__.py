"""Sound effect presets and the builders that turn them into stereo graphs."""